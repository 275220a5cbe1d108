from setuptools import setup

from taperscope.version import base_version

tests_require = ['pytest>=3.2.0', 'hypothesis', 'delayed-assert', 'pytest-mock']

setup(
    name='taperscope',
    version=base_version,
    packages=['taperscope', 'taperscope.utils'],
    license='BSD-2-Clause',
    description='Window functions for spectral analysis, and their figures of merit',
    python_requires='>=3.6',
    tests_require=tests_require,
    extras_require={'test': tests_require},
    install_requires=[
        'ruamel.yaml>=0.15.70',  # See test_config.py to pick a suitable minimum version
        'numpy', 'scipy', 'click',
        'attrs>=18.2.0',
    ],
    entry_points={
        'console_scripts': ['taperscope=taperscope.cli:main'],
    },
)
