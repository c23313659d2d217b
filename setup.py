from os import path

from setuptools import setup

with open(path.join(path.dirname(__file__), 'README.rst')) as f:
    long_description = f.read().strip()

setup(
    name='pyesrp',
    version='0.1.0',
    packages=['pyesrp'],
    install_requires=[
        'cryptography',
    ],
    extras_require={
        'test': ['pytest'],
    },
    description='Python implementation of SRP-6a protocol computations with pluggable crypto and variants',
    long_description=long_description,
    license='MIT',
    python_requires='>=3.6.0',
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Security :: Cryptography',
        'Topic :: Software Development :: Libraries',
    ],
)
