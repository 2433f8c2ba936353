# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="bsmanifest",
    version="1.0.0",
    description="Hashed file manifest generator for Beat Saber installs",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["bsmanifest*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'bsmanifest=bsmanifest.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
