#! /usr/bin/env python3

import os
from setuptools import setup

def read_file(file_name):
    path = os.path.join(os.path.dirname(__file__), file_name)
    with open(path) as f:
        lines = f.readlines()
    return ''.join(lines)

VERSION = read_file('vcfio/version.py').split("'")[1]

setup(
    name='vcfio',
    version=VERSION,
    description='Fast round-trip reading and writing of VCF files',
    long_description=read_file('README.rst'),
    entry_points={"console_scripts": ["vcfio=vcfio.application.cli:main"]},
    packages=[
        'vcfio',
        'vcfio/application',
    ],
    install_requires=[
        'numpy',
        'pysam',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    keywords=['biology', 'bioinformatics', 'genetics', 'genomics', 'vcf'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'Natural Language :: English',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
    ]
    )
