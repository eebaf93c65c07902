"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='logolang',
	version='0.1.0',
	packages=['logolang'],
	entry_points={
		'console_scripts': ["logolang = logolang.cmdline:main"],
	},
	license='MIT',
	description='An interpreter for a small Logo dialect that draws turtle graphics to PNG or SVG',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Multimedia :: Graphics",
		"Topic :: Education",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"pygame>=2.4.0",
	]
)
