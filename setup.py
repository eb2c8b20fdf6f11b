from setuptools import find_packages, setup

setup(
    name="flyingchess-client",
    version='0.1.0',
    description="State synchronization and board engine for a Flying Chess game client",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.9",
    install_requires=[
        "gymnasium>=1.0.0",
        "numpy>=1.21.0",
        "pygame>=2.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
)
