from setuptools import setup, find_packages

setup(
    name="eligex",
    version="0.1.0",
    description="Exam eligibility rule evaluation engine",
    packages=find_packages(include=['eligex', 'eligex.*']),
    package_data={
        'eligex': ['config/default_config.yaml'],
    },
    python_requires='>=3.9',
    install_requires=[
        'pydantic>=2.0',
        'pyyaml',
        'click',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
        ],
    },
    entry_points={
        'console_scripts': [
            'eligex=eligex.cli:cli',
        ],
    },
)
