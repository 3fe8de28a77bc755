# jarpack - Java archive packaging for Python-based builds
#
# Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

"""
Pluggable classes for customizing the format that jarpack uses when writing log messages to stdout
(for example to match the error format of GNU Make, which many editors can parse).
"""

import logging

_registeredConsoleFormatters = {}

class ConsoleFormatter(logging.Handler):
	"""
	Base class for customizing the format used
	for handling log records when displaying to the command console/stdout.

	Use self.fmt.format(record) to format the message including (multi-line) python
	exception traces.

	This class is only used for stdout, it does not affect the format used
	to write messages to the on-disk jarpack log file.
	"""

	def __init__(self, output, buildOptions, **kwargs):
		"""
		@param output: The output stream, which can cope with unicode characters.
		@param buildOptions: Dictionary of build options
		"""
		super().__init__()
		self.output = output
		self.buildOptions = buildOptions
		self.fmt = logging.Formatter()

	def emit(self, record):
		raise NotImplementedError("Not Implemented")

def registerConsoleFormatter(name, handler):
	"""
	Make a custom console formatter class available for use by jarpack.
	"""
	_registeredConsoleFormatters[name] = handler

class DefaultConsoleFormatter(ConsoleFormatter):
	"""
	The default text output formatter for jarpack.
	"""
	def __init__(self, output, buildOptions, **kwargs):
		ConsoleFormatter.__init__(self, output, buildOptions, **kwargs)
		self.fmt = logging.Formatter('%(message)s')

	def emit(self, record):
		self.output.write('%s\n' % self.fmt.format(record))
		self.output.flush()

class MakeConsoleFormatter(ConsoleFormatter):
	"""
	ConsoleFormatter that logs in a format that matches GNU Make.

	Output format::

		file:line: category: description

	"""
	def emit(self, record):
		if record.levelno == logging.ERROR:
			category = 'error'
		elif record.levelno == logging.WARNING:
			category = 'warning'
		else:
			category = None

		filename = getattr(record, 'jarpack_filename', None)
		if filename:
			location = '%s:%s' % (filename, getattr(record, 'jarpack_line', None) or 0)
		elif record.name in ['scheduler', 'jarpack']:
			location = 'jarpack'
		else:
			location = '%s:%s' % (record.pathname, record.lineno or 0)

		if category:
			self.output.write("%s: %s: %s\n" % (location, category, self.fmt.format(record)))
		else:
			self.output.write("%s\n" % self.fmt.format(record))

		self.output.flush()

registerConsoleFormatter("default", DefaultConsoleFormatter)
registerConsoleFormatter("make", MakeConsoleFormatter)
