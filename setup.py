from setuptools import setup, find_packages

setup(
    name="prismline",
    version="0.1.0",
    description="Color markup engine: hex, gradient and rainbow markup to styled text",
    packages=find_packages(include=["prismline", "prismline.*"]),
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.12",
)
