"""Render Apache-style access log lines (``%h %l %u %t "%r" %>s %b``)
for HTTP requests served by any Python web server. Format strings are
compiled once, then each request renders in a single pass over the
compiled segments.
"""

from setuptools import setup, find_packages


__author__ = 'logformat contributors'
__version__ = '0.1.0'
__license__ = 'BSD'

desc = ('Apache LogFormat-style access log lines for Python HTTP servers.')


setup(name='logformat',
      version=__version__,
      description=desc,
      long_description=__doc__,
      author=__author__,
      packages=find_packages(),
      install_requires=['boltons>=20.0.0'],
      extras_require={'test': ['pytest']},
      python_requires='>=3.7',
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      classifiers=[
          'Intended Audience :: Developers',
          'Topic :: System :: Logging',
          'Topic :: Internet :: WWW/HTTP :: HTTP Servers',
          'Topic :: Utilities',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy',
      ]
)


"""
A brief checklist for release:

* pytest
* git commit (if applicable)
* Bump setup.py version off of -dev
* git commit -a -m "bump version for x.y.z release"
* python -m build && twine upload dist/*
* git commit
* git tag -a x.y.z -m "brief summary"
* write CHANGELOG
* git commit
* bump setup.py version onto n+1 dev
* git commit
* git push

"""
