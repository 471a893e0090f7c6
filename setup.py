from setuptools import setup, find_packages
from pathlib import Path

# Read the requirements from requirements.txt
reqs_path = Path(__file__).parent / "requirements.txt"
requirements = [
    line.strip()
    for line in reqs_path.read_text().splitlines()
    if line.strip() and not line.startswith("#")
]

setup(
    name="eolmap",
    version="0.1.0",
    description="Maps git line ending settings to the line endings git actually produces",
    packages=find_packages(include=["eolmap", "eolmap.*"]),
    py_modules=["cli"],
    package_data={"eolmap": ["templates/*.j2"]},
    python_requires=">=3.12",
    install_requires=requirements,
    extras_require={"test": ["pytest>=7"]},
)
