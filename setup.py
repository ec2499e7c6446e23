from setuptools import setup, find_packages
import re

# Read version from shiftpay/__init__.py
with open('shiftpay/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='shift-pay',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'shiftpay': ['tax-rules/*/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'shift-pay=shiftpay.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Shift pay and PAYG withholding estimates.',
    python_requires='>=3.10',
)
