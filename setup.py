from setuptools import setup, find_packages

setup(
    name='pseintlang',
    version='0.1',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=['pyarrow'],  # Arrays are pyarrow float64 arrays
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'pseint=pseint_lang.cli:main'  # Entry point to main function
        ]
    },
    author='PSeInt Lang Contributors',
    description='A Python interpreter for PSeInt-style Spanish pseudocode',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    license='LGPLv3.0',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
    python_requires='>=3.8',
)
