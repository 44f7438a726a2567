from setuptools import find_packages, setup

# Installation du moteur de factures
# Utiliser :
#   pip install -e .
#   pip install -e .[test]   # dépendances des tests

setup(
    name='invoicer',
    version='1.0',
    description="Générateur de factures PDF local (API FastAPI + rendu reportlab)",
    packages=find_packages(include=['invoicer', 'invoicer.*']),
    python_requires='>=3.10',
    install_requires=[
        'fastapi',
        'pydantic>=2',
        'reportlab',
        'uvicorn',
    ],
    extras_require={
        'test': ['pytest', 'httpx', 'pypdf'],
    },
    entry_points={
        'console_scripts': ['invoicer-render=invoicer.cli:main'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
)
