from setuptools import setup, find_packages

setup(
    name="awsswitch",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "boto3>=1.26.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "awsswitch=awsswitch.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="Switch the default AWS configuration between profiles kept on disk",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
