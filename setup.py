from setuptools import setup, find_namespace_packages

setup(
    name="beefdock",
    version="0.1.0",
    description="Build a BeEF docker image on Alpine from a pinned branch commit",
    packages=find_namespace_packages(where="src", include=["beefdock*"]),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "pydantic>=2.0",
        "click>=8.0",
        "python-dotenv>=1.0",
        "jinja2>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "beefdock=beefdock.CLI.main:main",
        ],
    },
)
