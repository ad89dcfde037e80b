import os
from setuptools import setup, find_packages

# Read version from __init__.py
with open(os.path.join("listingscraper", "__init__.py"), "r") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[1].strip().strip('"').strip("'")
            break
    else:
        version = "0.1.0"

# Read long description from README
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

# Read requirements
with open("requirements.txt", "r") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="listingscraper",
    version=version,
    description="Polite paginated crawler for product and rental listing sites",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="ListingScraper Team",
    packages=find_packages(exclude=["tests", "*.tests"]),
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "listingscraper-crawl=crawlers.runner:main",
        ],
    },
    include_package_data=True,
)
