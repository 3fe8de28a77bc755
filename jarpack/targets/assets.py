# jarpack - Java archive packaging for Python-based builds
#
# Copyright (c) 2026 The jarpack authors
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
Contains the `Assets` target, which gathers static web assets (images, stylesheets, scripts etc) from one or more
source directories into a single output directory, ready to be packaged into a ``.war``.
"""

import os, shutil

from jarpack.pathsets import FindPaths
from jarpack.basetarget import BaseTarget
from jarpack.utils.flatten import flatten
from jarpack.utils.fileutils import mkdir, isDirPath, getmtime, normLongPath
from jarpack.utils.buildexceptions import BuildException

class Assets(BaseTarget):
	""" Target that copies the contents of each source directory into the output directory.

	A file is only copied if it does not yet exist in the output directory or is older than the source, so when
	several source directories contain the same file the newest one is used.

	For example::

		assets = Assets('${OUTPUT_DIR}/webapp/', ['src/main/webapp/', '${BUILD_WORK_DIR}/generated-css/'])
		War('${OUTPUT_DIR}/shop.war', package=FindPaths(assets), ...)
	"""

	def __init__(self, dest, paths):
		"""
		@param dest: the output directory, which must end with a ``/``.

		@param paths: the source directories (each ending with a ``/``), which may be strings or targets
			that generate a directory. None entries are ignored.
		"""
		if not isDirPath(dest): raise BuildException('Assets target name must be a directory (ending with "/"): %s'%dest)
		self.sources = [FindPaths(p) for p in flatten(paths)]
		BaseTarget.__init__(self, dest, self.sources)
		self.registerImplicitInput(lambda context: ['source: %s'%context.expandPropertyValues('%s'%s) for s in self.sources])

	def run(self, context):
		mkdir(self.path)
		copied = 0
		for source in self.sources:
			for (src, dest) in source.resolveWithDestinations(context):
				target = os.path.join(self.path, dest)
				if os.path.exists(target) and getmtime(target) >= getmtime(src): continue
				mkdir(os.path.dirname(target))
				shutil.copy2(normLongPath(src), normLongPath(target))
				copied += 1
		self.log.info('Copied %d asset file(s) to %s', copied, self.path)
