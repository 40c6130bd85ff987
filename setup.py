from setuptools import setup, find_packages

setup(
    name="obfuscalc",
    version="1.0.0",
    description="Heuristic metrics, scoring and recommendations for obfuscation parameters",
    author="Kalmantic Applied AI Lab",
    license="MIT",
    packages=find_packages(include=["obfuscalc", "obfuscalc.*"]),
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.7",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "obfuscalc=obfuscalc.cli:main",
        ],
    },
    python_requires=">=3.8",
)
