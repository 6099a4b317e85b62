from setuptools import setup, find_packages

setup(
    name="editscript",
    version="0.1.0",
    packages=find_packages(include=["editscript", "editscript.*"]),
    python_requires=">=3.8",
    install_requires=[
        "whatthepatch>=1.0.2",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
