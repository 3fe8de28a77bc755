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
Support for generating the ``META-INF/MANIFEST.MF`` file of a Java archive.

A manifest can be specified in any of the following ways, each represented by a subclass of `ManifestSpec`:

	- `Mapping`: a ``dict`` of header names to values, e.g. ``{'Implementation-Title':'My App'}``
	- `SectionList`: a ``list`` of dicts, one for each section of the manifest; a section's ``Name``
	  header is always written first
	- `RawText`: a ``str`` containing preformatted manifest text
	- `ManifestFile`: the path of an existing manifest file
	- `Deferred`: a function taking no arguments that returns one of the above when the archive is built

Build files can pass plain Python values, which are converted using `ManifestSpec.create`.

`ManifestBuilder` turns a specification into the lines of the manifest, always starting with the
``Manifest-Version`` and ``Created-By`` headers, and wrapping long lines at 72 characters as required by the
JAR file specification (a continuation line starts with a single space).
"""

import io

from jarpack.utils.buildexceptions import InvalidManifestSpec

import logging
log = logging.getLogger('jarpack.manifest')

MANIFEST_PATH = 'META-INF/MANIFEST.MF'

MANIFEST_LINE_LIMIT = 72
""" No physical manifest line may be this long or longer. """

def wrapManifestLine(line):
	""" Split a logical ``Name: value`` line into physical lines of less than 72 characters.

	A line that is too long keeps its first 71 characters and the remainder continues on
	the next line prefixed by a single space, which may itself be split again.

	>>> wrapManifestLine('Class-Path: a.jar')
	['Class-Path: a.jar']
	>>> wrapManifestLine('x'*71) == ['x'*71]
	True
	>>> wrapManifestLine('x'*72) == ['x'*71, ' x']
	True
	>>> [len(l) for l in wrapManifestLine('y'*200)]
	[71, 71, 60]
	>>> line = 'Class-Path: '+' '.join('lib/library-%d.jar'%i for i in range(20))
	>>> wrapped = wrapManifestLine(line)
	>>> max(len(l) for l in wrapped) < 72
	True
	>>> wrapped[0]+''.join(l[1:] for l in wrapped[1:]) == line
	True
	"""
	result = []
	while len(line) >= MANIFEST_LINE_LIMIT:
		result.append(line[:MANIFEST_LINE_LIMIT-1])
		line = ' '+line[MANIFEST_LINE_LIMIT-1:]
	result.append(line)
	return result

def unwrapManifestLines(lines):
	""" Join continuation lines (which start with a single space) back onto the line they continue,
	returning the logical lines.

	>>> unwrapManifestLines(['Class-Path: lib/a.jar', '  lib/b.jar', 'Main-Class: Foo'])
	['Class-Path: lib/a.jar lib/b.jar', 'Main-Class: Foo']
	>>> unwrapManifestLines(wrapManifestLine('z'*150)) == ['z'*150]
	True
	"""
	result = []
	for l in lines:
		if l.startswith(' ') and result:
			result[-1] += l[1:]
		else:
			result.append(l)
	return result

def splitManifestText(text):
	""" Split manifest text into lines, accepting CR LF, LF or CR line endings.

	>>> splitManifestText('A: 1\\r\\nB: 2\\r\\n')
	['A: 1', 'B: 2']
	>>> splitManifestText('A: 1\\rB: 2')
	['A: 1', 'B: 2']
	"""
	lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
	if lines and lines[-1] == '': del lines[-1]
	return lines

class ManifestSpec(object):
	""" Base class for the different ways of specifying the contents of a manifest.
	"""

	@staticmethod
	def create(value):
		""" Convert a value from a build file into a `ManifestSpec`, or raise `InvalidManifestSpec`.

		>>> ManifestSpec.create({'Main-Class':'Foo'})
		Mapping({'Main-Class': 'Foo'})
		>>> ManifestSpec.create([{'Name':'a/'}])
		SectionList([{'Name': 'a/'}])
		>>> ManifestSpec.create('Main-Class: Foo')
		RawText('Main-Class: Foo')
		>>> ManifestSpec.create(42)
		Traceback (most recent call last):
		...
		jarpack.utils.buildexceptions.InvalidManifestSpec: Invalid manifest, expecting dict, list of dicts, text, manifest file or function but got: 42
		"""
		if isinstance(value, ManifestSpec): return value
		if isinstance(value, dict): return Mapping(value)
		if isinstance(value, (list, tuple)) and all(isinstance(s, dict) for s in value): return SectionList(value)
		if isinstance(value, str): return RawText(value)
		if callable(value): return Deferred(value)
		raise InvalidManifestSpec('Invalid manifest, expecting dict, list of dicts, text, manifest file or function but got: %r'%(value,))

	def toLines(self, builder):
		""" Return the list of physical lines for this specification (excluding the standard header lines).

		@param builder: the `ManifestBuilder`, used for value expansion and header defaults.
		"""
		raise NotImplementedError()

class Mapping(ManifestSpec):
	""" A single-section manifest given as a dict of headers, which are written sorted by name. """
	def __init__(self, headers):
		self.headers = dict(headers)

	def toLines(self, builder):
		headers = dict(builder.defaults)
		headers.update(self.headers)
		lines = []
		for key in sorted(headers, key=lambda k: str(k).strip()):
			lines.extend(builder.headerLine(key, headers[key]))
		return lines

	def __repr__(self): return 'Mapping(%r)'%self.headers

class SectionList(ManifestSpec):
	""" A manifest given as a list of sections, each a dict of headers.

	Each section starts with its ``Name`` header (if any), followed by the other headers sorted by name,
	then a blank line.
	"""
	def __init__(self, sections):
		self.sections = [dict(s) for s in sections]

	def toLines(self, builder):
		lines = []
		for section in self.sections:
			if 'Name' in section:
				lines.extend(builder.headerLine('Name', section['Name']))
			for key in sorted((k for k in section if k != 'Name'), key=lambda k: str(k).strip()):
				lines.extend(builder.headerLine(key, section[key]))
			lines.append('')
		return lines

	def __repr__(self): return 'SectionList(%r)'%self.sections

class RawText(ManifestSpec):
	""" Preformatted manifest text; each line is wrapped if needed but otherwise used as-is. """
	def __init__(self, text):
		self.text = text

	def toLines(self, builder):
		lines = []
		for l in splitManifestText(self.text):
			lines.extend(wrapManifestLine(l))
		return lines

	def __repr__(self): return 'RawText(%r)'%self.text

class ManifestFile(ManifestSpec):
	""" A manifest read from an existing file (which should not include the standard header lines). """
	def __init__(self, path, encoding='utf-8'):
		self.path = path
		self.encoding = encoding

	def toLines(self, builder):
		with io.open(self.path, 'r', encoding=self.encoding) as f:
			return RawText(f.read()).toLines(builder)

	def __repr__(self): return 'ManifestFile(%r)'%self.path

class Deferred(ManifestSpec):
	""" A function with no arguments that is called when the manifest is built, returning any other specification. """
	def __init__(self, fn):
		self.fn = fn

	def toLines(self, builder):
		return ManifestSpec.create(self.fn()).toLines(builder)

	def __repr__(self): return 'Deferred(%s)'%getattr(self.fn, '__qualname__', self.fn)

class ManifestBuilder(object):
	""" Renders a manifest specification into the lines of a ``MANIFEST.MF`` file.

	>>> print('\\n'.join(ManifestBuilder('jarpack').render({'Implementation-Version': '1.0', 'Build-By': 'ci'})))
	Manifest-Version: 1.0
	Created-By: jarpack
	Build-By: ci
	Implementation-Version: 1.0
	>>> print('\\n'.join(ManifestBuilder('jarpack').render([{'Sealed':'true', 'Name':'com/acme/'}, {'Name':'org/x/', 'B':'2', 'A':'1'}])))
	Manifest-Version: 1.0
	Created-By: jarpack
	Name: com/acme/
	Sealed: true
	<BLANKLINE>
	Name: org/x/
	A: 1
	B: 2
	<BLANKLINE>
	>>> ManifestBuilder('jarpack').render(lambda: 'Main-Class: Foo\\nX: y')
	['Manifest-Version: 1.0', 'Created-By: jarpack', 'Main-Class: Foo', 'X: y']
	>>> ManifestBuilder('jarpack', defaults={'Implementation-Vendor':'Acme', 'Main-Class':'Default'}).render({'Main-Class':'Foo'})
	['Manifest-Version: 1.0', 'Created-By: jarpack', 'Implementation-Vendor: Acme', 'Main-Class: Foo']
	>>> ManifestBuilder('jarpack').render(3.5)
	Traceback (most recent call last):
	...
	jarpack.utils.buildexceptions.InvalidManifestSpec: Invalid manifest, expecting dict, list of dicts, text, manifest file or function but got: 3.5
	"""
	def __init__(self, createdBy, defaults=None, expandValue=None):
		"""
		@param createdBy: the value of the ``Created-By`` header, typically the tool name and version.

		@param defaults: a dict of headers added to `Mapping` specifications unless overridden there,
		as set by the ``jar.manifest.defaults`` option.

		@param expandValue: a function used to expand each header name and value (e.g. ``${...}`` properties),
		or None to use them as-is.
		"""
		self.createdBy = createdBy
		self.defaults = dict(defaults or {})
		self.expandValue = expandValue or (lambda v: v)

	def getHeaderLines(self):
		return ['Manifest-Version: 1.0', 'Created-By: %s'%self.createdBy]

	def headerLine(self, key, value):
		""" Returns the wrapped physical lines for a single header. """
		key = self.expandValue(str(key)).strip()
		value = self.expandValue(str(value)).strip()
		return wrapManifestLine('%s: %s'%(key, value))

	def render(self, spec):
		""" Returns the list of physical lines of the manifest, starting with the standard header lines.

		@param spec: a `ManifestSpec`, or a value that can be converted to one by `ManifestSpec.create`.
		"""
		return self.getHeaderLines()+ManifestSpec.create(spec).toLines(self)

	def getText(self, spec):
		""" Returns the full text of the manifest file, with a newline after every line. """
		return '\n'.join(self.render(spec))+'\n'

	def getBytes(self, spec):
		""" Returns the manifest file contents encoded as UTF-8. """
		return self.getText(spec).encode('utf-8')
