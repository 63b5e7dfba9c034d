from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()
with open("orginline/semver.txt", encoding="utf-8") as fh:
    semver = fh.read().strip()
with open("requirements.txt", encoding="utf-8") as fh:
    install_requires = [x.strip() for x in fh.read().strip().split("\n") if len(x) and x[0].isalpha()]

setup(
    name="orginline",
    version=semver,
    description="A parser for Org-mode inline markup: emphasis, links, footnotes, timestamps and the rest.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["orginline", "orginline.*"]),
    package_data={"orginline": ["py.typed", "semver.txt"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": ["pytest>=7.0"]},
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.10",
        "Topic :: Text Processing :: Markup",
    ],
    entry_points={"console_scripts": ["orginline = orginline:main"]},
)
