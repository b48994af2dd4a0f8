# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="cubism-asset-processor",
    version="0.1.0",
    description="Asset pipeline hooks: builtin Cubism resources bootstrap, change dispatch and project patching",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["cubism_assets*"]),
    python_requires=">=3.9",
    install_requires=[
        "PyYAML",  # Material and mask texture asset files
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'cubism-assets=cubism_assets.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
