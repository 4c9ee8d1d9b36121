from pathlib import Path
from setuptools import find_packages, setup

README = Path(__file__).parent / "README.md"

setup(
    name="yeipee",
    version="0.3.0",
    description="Server-side processing of YEAST templates (model, declare and macro-output scripts)",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    author="yeipee contributors",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["yeipee", "yeipee.*"]),
    package_data={"yeipee": ["resources/*.js"]},
    install_requires=[
        "mini-racer>=0.12",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["yeipee=yeipee.cli:main"],
    },
)
