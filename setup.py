#!/usr/bin/env python
from setuptools import setup
import os


def get_version():
    curdir = os.path.dirname(__file__)
    filename = os.path.join(curdir, 'src', 'svgcleaner', 'version.py')
    with open(filename, 'rb') as fp:
        return fp.read().decode('utf8').split('=')[1].strip(" \n'")


def readme():
    with open('README.rst') as f:
        return f.read()


setup(
    name='svgcleaner',
    version=get_version(),
    description='Clean SVG files: strip editor cruft, unreferenced content and long ids',
    long_description=readme(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
        'Topic :: Text Processing :: Markup :: XML',
    ],
    keywords='svg xml minify scour',
    license='Apache License 2.0',
    package_dir={'': 'src'},
    packages=[
        'svgcleaner',
        'svgcleaner.core',
    ],
    python_requires='>=3.10',
    install_requires=[
        'cssutils',
    ],
    extras_require={
        'test': [
            'pytest'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': ['svgcleaner=svgcleaner.__main__:main']
    },
    )
