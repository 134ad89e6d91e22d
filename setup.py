# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dirstats",
    version="1.0.0",
    description="Recursive directory analysis: sizes, counts, common words, largest images and vacant directories",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dirstats*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dirstats=dirstats.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX",
    ],
)
