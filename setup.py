# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="repostruct",
    version="1.0.0",
    description="Check that repository directories comply with an XML structure definition",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["repostruct*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'repostruct=repostruct.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
