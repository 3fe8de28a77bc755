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
Contains `BuildFileLocation`, which identifies the line of a build file that defined a target or raised an error.
"""

import inspect, os, sys

def formatFileLocation(path, lineNumber):
	""" Format a file path and line number in the usual "file:line" way.

	>>> formatFileLocation('/build/root.jarpack.py', 12)
	'/build/root.jarpack.py:12'
	>>> formatFileLocation('/build/root.jarpack.py', None)
	'/build/root.jarpack.py'
	"""
	if lineNumber: return '%s:%d'%(path, lineNumber)
	return path

class BuildFileLocation(object):
	""" Represents information about a location in the user's build file.
	"""
	buildFile = None
	buildDir = None
	lineNumber = None

	_currentBuildFile = [] # for internal use only; last item indicates the file currently being parsed

	def __init__(self, raiseOnError=False):
		"""
		Constructs a new instance by inspecting the stack to find what part
		of the build file we're currently processing.

		Only useful while build files are being parsed; an empty location
		is returned if this is called while a target is building.

		@param raiseOnError: if False, creates a BuildFileLocation with None for
		the buildFile/buildDir if we are not currently parsing any build files.
		"""
		x = self._getCorrectFrame() if BuildFileLocation._currentBuildFile else None

		if x is not None:
			filename, lineno = x
			self.buildFile = filename
			self.buildDir = os.path.dirname(filename)
			self.lineNumber = lineno
		elif raiseOnError:
			raise Exception('Cannot find the location in source build file')

	def __str__(self):
		if self.buildFile: return formatFileLocation(self.buildFile, self.lineNumber)
		return '<unknown build file location>'

	def getLineString(self):
		return self.__str__()

	def _getCorrectFrame(self):
		current = BuildFileLocation._currentBuildFile[-1].lower().replace('\\','/')
		frame = sys._getframe(1)
		# nb: this can be expensive so do the bare minimum of work (no disk access)
		while frame:
			filename = inspect.getfile(frame)
			if filename.lower().replace('\\','/') == current:
				return filename, inspect.getlineno(frame)
			frame = frame.f_back
		# the file is being parsed but this call came from a module it imports
		return BuildFileLocation._currentBuildFile[-1], None
