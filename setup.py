"""Setup script for the RNS Dashboard API."""

import os
from setuptools import setup, find_packages

# Get description from README
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Get version from package
about = {}
with open(os.path.join("rns_dashboard", "__init__.py"), "r", encoding="utf-8") as f:
    exec(f.read(), about)

# Get dependencies from requirements.txt
with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = [line.strip() for line in f.readlines() if line.strip() and not line.startswith("#")]

setup(
    name="rns-dashboard",
    version=about["__version__"],
    description="Resolve RNS (.rsk) names and aggregate Rootstock account balances, tokens, NFTs and transfers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author=about["__author__"],
    author_email=about["__email__"],
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Framework :: FastAPI",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    ],
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "rns-dashboard=rns_dashboard.__main__:main",
        ],
    },
)
