# setup.py
from setuptools import setup, find_packages

setup(
    name="clove",
    version="0.1.0",
    description="A minimal Clojure-flavoured evaluator for the first chapter of SICP",
    packages=find_packages(include=["clove", "clove.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["clove=clove.__main__:main"],
    },
    zip_safe=False,
)
