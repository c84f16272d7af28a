from setuptools import setup, find_packages


setup(
    name="easyzip",
    version="0.1",
    packages=find_packages(include=["easyzip", "easyzip.*"]),
    description="Archive files or directory trees into ZIP containers and extract them back.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[],
    entry_points={
        "console_scripts": [
            "easyzip=easyzip.cli:main",
        ]
    },
)
