"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='konfi-lang',
	version='0.1.0',
	packages=['konfi'],
	entry_points={
		'console_scripts': ["konfi = konfi.cmdline:main"],
	},
	license='MIT',
	description='A small declarative configuration language with lazy, order-independent record fields',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.10",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
	],
	python_requires='>=3.10',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
