#!/usr/bin/python3

from setuptools import setup


with open("README.md", "r") as f:
    long_description = f.read()


setup(name='mountgen',
      version='0.9.0',
      description='Python module for generating the auxiliary units of fstab mount units',
      long_description=long_description,
      long_description_content_type="text/markdown",
      packages=['mountgen', 'mountgen.tasks'],
      install_requires=['pyudev'],
      extras_require={"test": ["pytest"]},
      python_requires=">=3.6",
      classifiers=["Development Status :: 4 - Beta",
                   "Intended Audience :: Developers",
                   "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
                   "Programming Language :: Python :: 3",
                   "Operating System :: POSIX :: Linux"]
     )
