# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="vsdeploy",
    version="1.0.0",
    description="Installer helpers for Visual Studio project integration: file mirroring, build events and copy steps",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["vsdeploy", "vsdeploy.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'vsdeploy=vsdeploy.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
