from setuptools import find_packages, setup

setup(
    name="anagrams",
    version="0.1.0",
    packages=find_packages(),
    python_requires=">=3.12",
    install_requires=["typer", "tqdm"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["anagrams = anagrams.cli:app"]},
)
