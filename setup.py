# coding: utf-8
from setuptools import find_packages, setup


with open('README.md', encoding='utf8') as file:
    long_description = file.read()

setup(
    name='jsonlib',
    version='1.0',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.8',
    license='MIT',
    description='JSON over HTTP requests wrapper and JSON/XML converter',
    long_description=long_description,
    long_description_content_type='text/markdown',
    install_requires=[
        'httpx',
        'requests',
        'xmltodict'
    ],
    extras_require={
        'test': ['pytest'],
    },
)
