from setuptools import setup, find_namespace_packages

setup(
    name='alohasim',
    version='0.1',
    packages=find_namespace_packages(include=['alohasim', 'alohasim.*']),
    install_requires=[
        'matplotlib',
        'numpy',
        'pandas',
        'simpy',
        'setuptools',
        'networkx',
        'tqdm',
    ],
    extras_require={
        'test': ['pytest'],
    },)
