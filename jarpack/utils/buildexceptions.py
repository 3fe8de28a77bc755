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
The `BuildException` class used for (non-internal) problems encountered while building, and
the more specific subclasses raised by the manifest and EAR packaging code.
"""

import traceback, sys

from jarpack.utils.buildfilelocation import BuildFileLocation


class BuildException(Exception):
	""" A BuildException represents an error caused by an incorrect build or a runtime build problem. i.e. anything
	that isn't an internal jarpack error.

	Typically a BuildException will not result in a python stack trace being
	printed whereas other exception types will, so only raise one if you're
	sure the message includes all required diagnostic information already.

	>>> str(BuildException('Something went wrong '))
	'Something went wrong'
	>>> str(BuildException('Invalid path', location=BuildFileLocation()))
	'Invalid path'
	>>> try:
	...   try:
	...     raise IOError('disk full')
	...   except Exception:
	...     raise BuildException('Cannot write archive', causedBy=True)
	... except BuildException as e:
	...   print(e)
	Cannot write archive: disk full
	"""

	def __init__(self, message, location=None, causedBy=False):
		"""
		@param message: the error cause (does not need to include the target name)

		@param location: usually None, or else a BuildFileLocation object for the source line that caused the problem.

		@param causedBy: if True, takes the exception currently on the stack as the cause of this exception, and
		adds it to the build exception message. If the cause is not a BuildException, then its stack
		trace will be captured too.
		"""
		assert message
		self.__msg = message.strip()
		self.__causedByTraceback = None

		if causedBy:
			causedBy = sys.exc_info()
			causedByExc = causedBy[1]

			if isinstance(causedByExc, BuildException):
				causedByMsg = causedByExc.__msg
				if not location: location = causedByExc.__location
			else:
				causedByMsg = '%s'%causedByExc
				self.__causedByTraceback = ''.join(traceback.format_exception(*causedBy))

			if causedByMsg not in self.__msg: self.__msg += (': %s'%causedByMsg)

		# keep things simple by using None instead of an empty BuildFileLocation object
		if (not location or not location.buildFile) and BuildFileLocation._currentBuildFile:
			location = BuildFileLocation(raiseOnError=False)
		if location and not location.buildFile: location = None
		self.__location = location

		Exception.__init__(self, self.__msg)

	def getLoggerExtraArgDict(self, target=None):
		"""
		Returns a dict suitable for passing as extra= in a logger call, to set
		filename/lineno location information if available.
		"""
		location = self.__location or (target.location if target else None)
		if location and location.buildFile:
			return {'jarpack_filename':location.buildFile, 'jarpack_line':location.lineNumber}
		return {}

	def __repr__(self):
		return 'BuildException<%s>'%self.toSingleLineString(None)

	def __str__(self):
		return self.toSingleLineString(None)

	def toSingleLineString(self, target):
		""" Return the exception message formatted to be a single line.

		Includes the name of the failed target if called with a target.
		"""
		result = self.__msg

		if self.__location and not str(self.__location) in result:
			result = '%s : %s'%(self.__location, result)
		if target:
			result = '%s : %s'%(target, result)
		return result

	def toMultiLineString(self, target, includeStack=False):
		""" Return the exception message, on multiple lines if necessary, possibly including the stack trace.

		@param target: The target causing the exception.
		@param includeStack: If true, also includes the stack trace of the exception.
		"""
		result = self.__msg
		if target:
			result = '%s : %s'%(target, result)

		location = self.__location
		if target and not location: location = target.location
		if location and location.buildFile:
			result += '\n  %s'%location.getLineString()

		if self.__causedByTraceback and includeStack:
			result = result + '\n\nCaused by:\n%s'%(self.__causedByTraceback)
		return result.strip()

class InvalidManifestSpec(BuildException):
	""" Raised when a manifest specification is not a mapping, a list of section mappings,
	text, a manifest file or a callable returning one of these. """

class UnsupportedComponentType(BuildException):
	""" Raised when an EAR component's type cannot be resolved to one of the supported types. """

class MissingDisplayName(BuildException):
	""" Raised by descriptor formats that require a display name when none was given.

	The J2EE 1.2 ``application.xml`` generator is lenient and writes an empty element instead.
	"""
