from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'coloredlogs',
    'iso8601',
]

setup(
    name='dropspace',
    version=__version__,
    description='NFT ledger contract with a public sale, running on a flat key-value store.',
    packages=find_packages(include=['dropspace', 'dropspace.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
