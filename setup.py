"""
Setup script for the Location Hierarchy application.
"""

from setuptools import setup, find_packages

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# Separate development requirements
dev_requirements = [req for req in requirements if any(dev in req for dev in ["pytest", "black", "flake8", "mypy", "sphinx"])]
install_requirements = [req for req in requirements if req not in dev_requirements]

setup(
    name="location-hierarchy",
    version="1.0.0",
    author="Data Analytics Team",
    description="Canonical city, district and neighborhood lookups for a real-estate marketplace",
    long_description="Location Hierarchy - resolves free-text location references into canonical (neighborhood, district, city) tuples, expands search text into neighborhood filter sets and aggregates neighborhood ratings.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    package_data={
        "location_hierarchy": ["data/*.csv"],
    },
    include_package_data=True,
    install_requires=install_requirements,
    extras_require={
        "dev": dev_requirements,
    },
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "location-hierarchy=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
