from setuptools import setup, find_packages

setup(
    name="targ",
    version="0.1.0",
    description="Typed, declarative command-line argument parsing.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(include=["targ", "targ.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0",
        "python-dateutil>=2.8",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
