# setup.py
from setuptools import setup, find_packages

setup(
    name="permfixer",
    version="0.1.0",
    description="Best-effort permission normalization for extracted build artifacts",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX",
        "Topic :: Software Development :: Build Tools",
    ],
)
