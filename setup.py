from setuptools import setup

with open("README.md") as f:
    long_description = f.read()

name = "utf8str"

setup(
    name=name,
    version="0.1.0",
    description="Fixed-width UTF-8 character strings with caller-owned buffers.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=[name],
    python_requires=">=3.7",
    install_requires=[],
    extras_require={
        "docs": [
            "lazydocs",
        ],
        "tests": [
            "pytest",
        ],
    },
    zip_safe=False,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing",
    ],
    keywords="{} utf-8 unicode codec".format(name),
)
