from setuptools import setup, find_packages

# Core dependencies (always required)
install_requires = [
    "PyYAML>=6.0,<7.0",
]

# Optional dependencies
extras_require = {
    "sqlalchemy": ["SQLAlchemy>=2.0.0,<3.0.0"],
    "test": ["pytest>=7.0", "SQLAlchemy>=2.0.0,<3.0.0"],
    "all": ["SQLAlchemy>=2.0.0,<3.0.0"],  # Install all optional dependencies
}

setup(
    name="jdbcurl",
    version="0.1.0",
    description="Extract and rebuild JDBC connection urls for a fixed set of database dialects",
    packages=find_packages(exclude=["jdbcurl.tests"]),
    include_package_data=True,
    package_data={
        'jdbcurl': [
            'driver_map.json',
        ],
    },
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
