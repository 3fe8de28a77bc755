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
Updates the ``Class-Path`` manifest header of an already-packaged archive so that it references
shared libraries (such as those bundled at the top level of an EAR), without duplicating any library
the archive can already see.
"""

import posixpath, re

from jarpack.utils.manifest import MANIFEST_PATH, ManifestBuilder, RawText, splitManifestText, unwrapManifestLines, wrapManifestLine
from jarpack.utils.ziputils import readEntry, listEntries, replaceEntry

import logging
log = logging.getLogger('jarpack.classpath')

CLASSPATH_HEADER = 'Class-Path'

_LINE_END = re.compile(r'\r\n|\r|\n')
_SECTION_BREAK = re.compile(r'(?:\r\n|\r(?!\n)|\n)(?:\r\n|\r(?!\n)|\n)')

def _headerName(line):
	return line.split(':', 1)[0].strip().lower()

def getIncludedLibraries(classpathEntries, archiveEntries, embeddedLibDir='WEB-INF/lib/'):
	""" Return the basenames of libraries already visible to an archive, from its existing ``Class-Path``
	entries and the libraries embedded in its own library directory.

	>>> getIncludedLibraries(['lib/a.jar', 'x/b.jar'], ['WEB-INF/', 'WEB-INF/lib/', 'WEB-INF/lib/c.jar', 'd.jar'])
	['a.jar', 'b.jar', 'c.jar']
	>>> getIncludedLibraries([], ['lib/e.jar'], embeddedLibDir='lib/')
	['e.jar']
	"""
	result = [posixpath.basename(e) for e in classpathEntries]
	for e in archiveEntries:
		if e.startswith(embeddedLibDir) and not e.endswith('/') and len(e) > len(embeddedLibDir):
			result.append(posixpath.basename(e))
	return result

def addToClasspath(manifestText, libraryPaths, archiveEntries=(), embeddedLibDir='WEB-INF/lib/'):
	""" Returns a tuple (newManifestText, appendedPaths) with each library whose basename is not already
	visible appended to the ``Class-Path`` header of the main section, on its own continuation line.

	The other sections, and all other headers of the main section, are kept exactly as they were,
	including their line endings.

	>>> text, added = addToClasspath('Manifest-Version: 1.0\\nClass-Path: a.jar\\n', ['lib/a.jar', 'lib/b.jar'])
	>>> added
	['lib/b.jar']
	>>> print(text, end='')
	Manifest-Version: 1.0
	Class-Path: a.jar
	  lib/b.jar
	>>> addToClasspath(text, ['lib/a.jar', 'lib/b.jar'])[1]
	[]
	>>> text, added = addToClasspath('Manifest-Version: 1.0\\r\\n\\r\\nName: x/\\r\\nSealed: true\\r\\n', ['lib/a.jar', 'lib/b.jar'])
	>>> text
	'Manifest-Version: 1.0\\r\\nClass-Path: lib/a.jar\\r\\n  lib/b.jar\\r\\n\\r\\nName: x/\\r\\nSealed: true\\r\\n'
	>>> addToClasspath('Manifest-Version: 1.0\\n', ['lib/c.jar'], archiveEntries=['WEB-INF/lib/c.jar'])[1]
	[]
	>>> addToClasspath('Manifest-Version: 1.0\\nMain-Class: A', ['lib/b.jar'])[0]
	'Manifest-Version: 1.0\\nMain-Class: A\\nClass-Path: lib/b.jar\\n'
	>>> addToClasspath('Manifest-Version: 1.0\\n\\nName: x/\\rSealed: true\\r\\n', ['lib/a.jar'])[0]
	'Manifest-Version: 1.0\\nClass-Path: lib/a.jar\\n\\nName: x/\\rSealed: true\\r\\n'
	"""
	m = _LINE_END.search(manifestText)
	newline = m.group(0) if m else '\n'

	# the sections after the main one are kept byte-for-byte, starting with the line end of the last main header
	m = _SECTION_BREAK.search(manifestText)
	if m:
		main, remainder = splitManifestText(manifestText[:m.start()]), manifestText[m.start():]
	else:
		main, remainder = splitManifestText(manifestText), newline

	# locate the physical lines of the existing header, if any
	start = end = None
	for i, l in enumerate(main):
		if not l.startswith(' ') and _headerName(l) == CLASSPATH_HEADER.lower():
			start, end = i, i+1
			while end < len(main) and main[end].startswith(' '): end += 1
			break
	if start is None:
		existing = []
	else:
		existing = unwrapManifestLines(main[start:end])[0].split(':', 1)[1].split()

	included = getIncludedLibraries(existing, archiveEntries, embeddedLibDir=embeddedLibDir)
	appended = []
	for path in libraryPaths:
		name = posixpath.basename(path)
		if name in included: continue
		included.append(name)
		appended.append(path)
	if not appended:
		return manifestText, []

	header = [] if not existing else main[start:end]
	for path in appended:
		if not header:
			header = wrapManifestLine('%s: %s'%(CLASSPATH_HEADER, path))
		else:
			header.extend(wrapManifestLine('  '+path))

	if start is None:
		main = main+header
	else:
		main = main[:start]+header+main[end:]

	return newline.join(main)+remainder, appended

def reconcileClasspath(archivePath, libraryPaths, embeddedLibDir='WEB-INF/lib/', createdBy='jarpack'):
	""" Rewrite the manifest of an existing archive so its ``Class-Path`` includes each of the specified libraries,
	skipping any whose basename is already on the ``Class-Path`` or in the archive's embedded library directory.

	The archive is replaced atomically, with all other entries unchanged and in the same order. If there is nothing
	to add the archive is not modified at all, so calling this repeatedly with the same libraries is harmless.
	An archive with no manifest gets one containing just the standard headers and the ``Class-Path``.

	@param archivePath: the .jar/.war/.rar file to update.

	@param libraryPaths: an ordered list of archive-relative library URIs (e.g. ``lib/spring.jar``).

	@param embeddedLibDir: the directory within the archive whose libraries are already visible to it.

	@return: the list of library paths that were appended.
	"""
	data = readEntry(archivePath, MANIFEST_PATH)
	if data is None:
		log.debug('No manifest in %s; a new one will be created', archivePath)
		text = ManifestBuilder(createdBy).getText(RawText(''))
	else:
		text = data.decode('utf-8')

	text, appended = addToClasspath(text, libraryPaths, archiveEntries=listEntries(archivePath), embeddedLibDir=embeddedLibDir)
	if not appended:
		log.debug('Class-Path of %s already includes all shared libraries', archivePath)
		return appended

	replaceEntry(archivePath, MANIFEST_PATH, text.encode('utf-8'))
	log.info('Added to Class-Path of %s: %s', archivePath, ' '.join(appended))
	return appended
