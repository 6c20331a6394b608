# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.
from setuptools import setup


readme = open('README.rst').read()

doc = [
    'sphinx',
]
install_requires = [
    "requests",
    "uritemplate",
    "jsonpointer",
]
test = [
    'pytest',
    'mock',
    'requests_mock',
]

setup(
    name='hyperwalker',
    version='1.0.0',
    description=("hyperwalker - Walk the links of JSON hypermedia APIs "
                 "and act on the resources they lead to"),
    long_description=readme,
    author="Riverbed Technology",
    author_email="eng-github@riverbed.com",
    packages=[
        'hyperwalker',
    ],
    package_dir={'hyperwalker': 'hyperwalker'},
    include_package_data=True,

    install_requires=install_requires,
    extras_require={
        'test': test,
        'doc': doc,
        'dev': test + doc,
        'all': [],
    },
    keywords='hyperwalker hypermedia rest',
    license='MIT',
    platforms='Linux, Mac OS, Windows',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Networking',
    ],
    python_requires='>=3.7',
)
