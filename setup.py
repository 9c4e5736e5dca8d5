from setuptools import setup, find_packages
from pathlib import Path

def parse_requirements(filename):
    return [line.strip() for line in Path(filename).read_text().splitlines()
            if line.strip() and not line.startswith("#")]

setup(
    name="asset-manifest",
    version="0.1.0",
    description="Digest-addressed asset publication with a persisted manifest",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=parse_requirements("requirements.txt"),
    extras_require={"dev": parse_requirements("requirements-test.txt")}
)
