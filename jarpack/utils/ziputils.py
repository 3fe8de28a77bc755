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
Helpers for reading, writing and updating zip-based archives (.zip, .jar, .war, .ear, .aar).
"""

import os
import zipfile

from jarpack.utils.fileutils import mkdir, normLongPath, isDirPath, openForAtomicReplace
from jarpack.utils.buildexceptions import BuildException

import logging
log = logging.getLogger('jarpack.ziputils')

class ArchiveWriter(object):
	""" Writes a new zip archive, rejecting duplicate entries (which would result in an invalid archive).

	Use from a ``with`` statement::

		with ArchiveWriter(path) as archive:
			archive.writeBytes('META-INF/MANIFEST.MF', manifestBytes)
			archive.include('com/acme/Foo.class', '/src/classes/com/acme/Foo.class')
	"""
	def __init__(self, path, compression=zipfile.ZIP_DEFLATED):
		self.path = normLongPath(path)
		self.compression = compression
		self.__entries = {} # entry name: source description
		self.__zip = None

	def __enter__(self):
		mkdir(os.path.dirname(self.path))
		self.__zip = zipfile.ZipFile(self.path, 'w', self.compression)
		return self

	def __exit__(self, ex_type, ex_val, tb):
		self.__zip.close()

	def __checkEntry(self, entryName, source):
		if entryName in self.__entries:
			raise BuildException('Duplicate archive entry "%s" from: "%s", "%s"'%(entryName, self.__entries[entryName], source))
		self.__entries[entryName] = source

	def include(self, entryName, sourcePath):
		""" Add the file or directory at sourcePath as the specified entry.

		@param entryName: the /-separated path within the archive; directories must end with a slash.
		"""
		entryName = entryName.replace('\\', '/').lstrip('/')
		self.__checkEntry(entryName, sourcePath)
		# directory entries must not be compressed (it confuses the Java tools)
		self.__zip.write(normLongPath(sourcePath).rstrip('/\\'), entryName,
			zipfile.ZIP_STORED if isDirPath(entryName) else self.compression)

	def writeBytes(self, entryName, data):
		""" Add an entry with the specified contents. """
		entryName = entryName.replace('\\', '/').lstrip('/')
		self.__checkEntry(entryName, '<generated>')
		self.__zip.writestr(entryName, data, self.compression)

	def hasEntry(self, entryName):
		return entryName.replace('\\', '/').lstrip('/') in self.__entries

def readEntry(archivePath, entryName):
	""" Return the bytes of an archive entry, or None if there is no such entry. """
	with zipfile.ZipFile(normLongPath(archivePath), 'r') as zf:
		try:
			return zf.read(entryName)
		except KeyError:
			return None

def listEntries(archivePath):
	""" Return the names of all entries in the archive, in archive order. """
	with zipfile.ZipFile(normLongPath(archivePath), 'r') as zf:
		return zf.namelist()

def replaceEntry(archivePath, entryName, data):
	""" Replace (or add) the contents of a single entry in an existing archive.

	All other entries are copied unchanged and in the same order. The new archive is written to a temporary file
	which replaces the original only once it is complete, so an error part-way through leaves the original intact.

	>>> import tempfile
	>>> path = tempfile.mkdtemp()+'/test.jar'
	>>> with zipfile.ZipFile(path, 'w') as zf:
	...    zf.writestr('META-INF/MANIFEST.MF', 'Manifest-Version: 1.0\\n')
	...    zf.writestr('a.txt', 'A')
	...    zf.writestr('b.txt', 'B')
	>>> replaceEntry(path, 'META-INF/MANIFEST.MF', b'Manifest-Version: 1.0\\nX: y\\n')
	>>> listEntries(path)
	['META-INF/MANIFEST.MF', 'a.txt', 'b.txt']
	>>> readEntry(path, 'META-INF/MANIFEST.MF')
	b'Manifest-Version: 1.0\\nX: y\\n'
	>>> readEntry(path, 'b.txt')
	b'B'
	"""
	archivePath = normLongPath(archivePath)
	replaced = False
	with zipfile.ZipFile(archivePath, 'r') as zin:
		with openForAtomicReplace(archivePath, 'wb') as f:
			with zipfile.ZipFile(f, 'w') as zout:
				zout.comment = zin.comment
				for info in zin.infolist():
					if info.filename == entryName:
						zout.writestr(info, data, info.compress_type)
						replaced = True
					else:
						zout.writestr(info, zin.read(info.filename), info.compress_type)
				if not replaced:
					zout.writestr(entryName, data, zipfile.ZIP_DEFLATED)
	log.debug('Replaced entry %s in %s', entryName, archivePath)
