#!/usr/bin/env python3

from setuptools import setup

setup(
    name="bookit",
    version="0.1.0",
    description="Terminal-based booking of billable hours.",
    author="the bookit authors",
    license="MIT",
    python_requires='>=3.8',
    packages=['bookit'],
    install_requires=[
        'PyYAML>=5.4',
        'Rich>=10.2',
        'python-dateutil>=2.8',
        'tzlocal>=2.1'
    ],
    extras_require={
        'test': ['pytest>=6.2']
    },
    include_package_data=True,
    entry_points={
        "console_scripts": "bookit=bookit.cli:console_main"
    },
    keywords='cli time tracking billing utility',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: End Users/Desktop',
        'Natural Language :: English',
        'Operating System :: POSIX',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.8',
        'Topic :: Office/Business',
        'Topic :: Utilities'
    ]
)
