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
Contains standard functionality for use in build files such as `jarpack.buildcommon.include`, and useful constants
such as `jarpack.buildcommon.IS_WINDOWS` and `jarpack.buildcommon.JARPACK_VERSION`.
"""

import os, inspect
import platform

import logging
# do NOT define a 'log' variable here or targets will use it by mistake

def __getJarpackVersion():
	with open(os.path.join(os.path.dirname(os.path.abspath(inspect.getfile(inspect.currentframe()))), "JARPACK_VERSION")) as f:
		return f.read().strip()

JARPACK_VERSION: str = __getJarpackVersion()
"""The current jarpack version."""

IS_WINDOWS: bool = platform.system()=='Windows'
""" A boolean that specifies whether this is Windows or some other operating system. """

def normpath(path):
	""" Normalizes the specified path, preserving any trailing slash indicating a directory.

	>>> normpath('lib/../war/').replace(os.sep, '/')
	'war/'
	"""
	from jarpack.utils.fileutils import normPath
	return normPath(path)

def include(file):
	""" Parse and register the targets and properties in the specified
	``XXX.jarpack.py`` file.

	Targets should only be defined in files included using this method,
	not using python import statements.

	@param file: a path relative to the directory containing this file.
	"""

	from jarpack.buildcontext import getBuildInitializationContext
	from jarpack.utils.buildfilelocation import BuildFileLocation

	file = getBuildInitializationContext().expandPropertyValues(file)

	assert file.endswith('.jarpack.py') # enforce recommended naming convention

	filepath = getBuildInitializationContext().getFullPath(file, os.path.dirname(BuildFileLocation._currentBuildFile[-1]))

	BuildFileLocation._currentBuildFile.append(filepath) # add to stack of files being parsed

	namespace = {}
	with open(filepath, "rb") as f:
		exec(compile(f.read(), filepath, 'exec'), namespace, namespace)

	del BuildFileLocation._currentBuildFile[-1]

	return namespace
