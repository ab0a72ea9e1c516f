from setuptools import setup, find_packages

setup(
    name="dropfour",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "gymnasium",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "dropfour=dropfour.interfaces.cli:main",
        ],
    },
)
