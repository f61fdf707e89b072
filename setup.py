# setup.py
from setuptools import setup, find_packages

setup(
    name="lispy",
    version="0.0.6",
    description="A small Lisp with q-expressions, currying and variadic lambdas",
    packages=find_packages(include=["lispy", "lispy.*"]),
    python_requires=">=3.10",
    extras_require={
        "tests": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lispy=lispy.repl:main"],
    },
    zip_safe=False,
)
