from setuptools import setup, find_packages

setup(
    name="mkdocs-doxyapi",
    version="1.0.0",
    description="MkDocs plugin publishing Doxygen XML output as API reference pages",
    keywords="mkdocs doxygen api c cpp documentation python",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "mkdocs>=1.4",
        "markdown>=3.3",
        "pygments>=2.12",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "doxyapi = mkdocs_doxyapi.plugin:DoxyApiPlugin",
        ],
    },
)
