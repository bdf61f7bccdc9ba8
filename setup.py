"""Configuration for the smoltok package."""

from Cython.Build import cythonize
from setuptools import setup, Extension, find_packages


def get_cython_extension_modules() -> list[Extension]:
    """Compile Cython sources into extension modules"""
    return cythonize(
        [
            "smoltok/tokenizers/cython/bpe.pyx",
        ],
        compiler_directives={
            "language_level": "3str",
        },
        build_dir="build",
    )


setup(
    name="smoltok",
    version="0.1.0",
    description="Byte-level BPE tokenizer for GPT-2-style vocabularies",
    python_requires=">=3.9",
    install_requires=[
        "regex",
    ],
    extras_require={
        "test": ["pytest"],
    },
    ext_modules=get_cython_extension_modules(),
    packages=find_packages(),
    package_data={"smoltok.tokenizers.cython": ["*.pyi"]},
    zip_safe=False,
)
