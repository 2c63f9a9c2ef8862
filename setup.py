from setuptools import find_packages, setup

with open("README.md") as f:
    long_description = f.read()

setup(
    name="xselect",
    version="0.1.0",
    description="Order statistics and quantiles of n-dimensional arrays by selection",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_dir={"xselect": "xselect"},
    test_suite="tests",
    python_requires=">=3.8",
    install_requires=["numba", "numpy", "xarray>=0.11"],
    extras_require={
        "dev": [
            "black",
            "hypothesis",
            "pytest",
            "pytest-cov",
        ],
    },
    classifiers=[
        # https://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
    ],
    keywords="quantile median quickselect order statistics",
)
