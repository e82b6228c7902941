"""
Setup script for the Location Cascade application.
"""

from setuptools import setup, find_packages

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# Separate development requirements
dev_requirements = [req for req in requirements if any(dev in req for dev in ["pytest", "black", "flake8", "mypy", "sphinx"])]
install_requirements = [req for req in requirements if req not in dev_requirements]

setup(
    name="location-cascade",
    version="1.0.0",
    author="Data Analytics Team",
    description="Cascading province, district, sector, cell and village selection",
    long_description="Location Cascade - a controller for choosing a Rwandan administrative location one level at a time, keeping every level's options consistent with the levels selected above it.",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    py_modules=["main"],
    package_data={
        "location_cascade": ["data/*.csv"],
    },
    install_requires=install_requirements,
    extras_require={
        "dev": dev_requirements,
    },
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "location-cascade=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
