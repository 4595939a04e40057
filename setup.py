# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="scenetree",
    version="0.3.0",
    description="Print the node tree of Godot scene (.tscn) files",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["scenetree*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'scenetree=scenetree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
