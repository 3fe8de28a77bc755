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

import os, stat

from jarpack.buildcommon import IS_WINDOWS
from jarpack.basetarget import BaseTarget
from jarpack.utils.fileutils import mkdir, normLongPath

class WriteFile(BaseTarget):
	""" Target for writing out a text or binary file with hardcoded or generated contents, such as a
	``web.xml`` or ``services.xml`` that is then packaged into an archive.

	The file is rebuilt only if its contents have changed.
	"""

	def __init__(self, name, getContents, dependencies=None, mode=None, executable=False, encoding='utf-8', args=None, kwargs=None):
		"""
		Example usage::

			WriteFile('${BUILD_WORK_DIR}/services/services.xml', lambda context: SERVICES_XML%context.expandPropertyValues('${SERVICE_NAME}'))

		@param name: the output filename

		@param getContents: a unicode character string (which will be subject to expansion),
			or binary bytes, or a function that accepts a context as input
			(followed optionally by any specified 'args') and returns
			the string/bytes that should be written to the file, using \\n for newlines.

			The function will be evaluated during the dependency resolution phase.

		@param mode: unix permissions to set with chmod on the destination file.
			If not specified, default mode is used. Ignored on Windows platforms.

		@param executable: set to True to add Unix executable permissions (simpler
			alternative to setting using mode)

		@param encoding: The encoding to use for converting the str to bytes.

		@param args: optional tuple containing arguments that should be passed to
			the getContents function, after the context argument (first arg)

		@param kwargs: optional dictionary containing kwargs that should be passed
			to the getContents function.

		@param dependencies: any targets which need to be built in order to run this target
		"""
		BaseTarget.__init__(self, name, dependencies or [])
		self.getContents = getContents
		self.__args = args or ()
		self.__kwargs = kwargs or {}
		self.__resolved = None
		self.__mode = mode
		self.__executable = executable
		self.__encoding = encoding
		self.registerImplicitInput(self.__getContentsImplicitInputs)

	def __getContentsImplicitInputs(self, context):
		""" The literal content text is considered the dependency of this target """
		contents = self._getContents(context)
		if isinstance(contents, bytes): contents = repr(contents)
		return contents.split('\n')+['mode: %s, executable: %s, encoding: %s'%(self.__mode, self.__executable, self.__encoding)]

	def run(self, context):
		contents = self._getContents(context)

		mkdir(os.path.dirname(self.path))
		path = normLongPath(self.path)
		if isinstance(contents, bytes):
			with open(path, 'wb') as f:
				f.write(contents)
		else:
			with open(path, 'w', encoding=self.__encoding) as f:
				f.write(contents)

		if self.__mode and not IS_WINDOWS:
			os.chmod(path, self.__mode)
		if self.__executable and not IS_WINDOWS:
			os.chmod(path, stat.S_IXOTH | stat.S_IXUSR | stat.S_IXGRP | os.stat(self.path).st_mode)

	def _getContents(self, context):
		if self.__resolved is None:
			c = self.getContents
			if isinstance(c, str) or hasattr(c, 'resolveToString'):
				self.__resolved = context.expandPropertyValues(c)
			elif callable(c):
				self.__resolved = c(context, *self.__args, **self.__kwargs)
			else: # hopefully bytes
				self.__resolved = c
			assert isinstance(self.__resolved, (str, bytes)), 'WriteFile function must return a str or bytes: %r'%self.__resolved
		return self.__resolved
