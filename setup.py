from setuptools import find_packages, setup

# Installation du service de personnalisation du menu
# Utiliser :
#   pip install -e .[test]

setup(
    name='TidyMenu',
    version='1.4.0',
    description="Réorganisation et masquage des entrées du menu d'administration",
    packages=find_packages(include=['tidy_menu', 'tidy_menu.*'], exclude=['tidy_menu.tests']),
    python_requires='>=3.10',
    install_requires=[
        'fastapi',
        'pydantic>=2',
        'uvicorn',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
    entry_points={
        'console_scripts': ['tidy-menu=tidy_menu.__main__:main'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
