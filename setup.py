# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="servedown",
    version="0.1.0",
    description="Resolve a tree of markdown content files into cached, addressable nodes",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["servedown", "servedown.*"]),
    python_requires=">=3.8",
    install_requires=[
        "PyYAML>=6.0",  # Metadata headers
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
