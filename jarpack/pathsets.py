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
Contains the PathSet classes which are used to specify the inputs of targets: lists of source paths,
each with a relative destination path that archive targets use as the entry name.

.. autosummary::
	PathSet
	DirBasedPathSet
	FindPaths
	AddDestPrefix
	SingletonDestRenameMapper
"""

import os, re

from jarpack.utils.flatten import flatten
from jarpack.utils.buildfilelocation import BuildFileLocation
from jarpack.utils.buildexceptions import BuildException
from jarpack.utils.fileutils import isDirPath
from jarpack.buildcontext import BaseContext

import logging
# don't define a 'log' variable here or targets will use it by mistake when importing this file

class BasePathSet(object):
	""" Base class for PathSet implementations.

	This is a stub class and should not be used directly.
	"""

	def resolve(self, context):
		""" Use the specified context to resolve the contents of this pathset
		to a list of normalized absolute paths (using OS-dependent slashes).

		All directory paths end with a slash.
		"""
		return [src for (src,dest) in self.resolveWithDestinations(context)]

	def resolveWithDestinations(self, context):
		""" Use the specified context to resolve the contents of this pathset
		to a list of (srcabs, destrel) pairs specifying the absolute and
		normalized path of each source path, and a relative path indicating the destination of that
		path (interpreted in a target-specific way, e.g. as the entry name by archive targets).

		May raise BuildException if the resolution fails.
		"""
		raise NotImplementedError('must implement resolveWithDestinations for %s'%self.__class__)

	def _resolveUnderlyingDependencies(self, context):
		""" Returns an iterable of the absolute source paths making up this set, for the purposes of target dependency
		evaluation. Where a directory is generated by a target, the target's path is returned rather than the contents
		of the directory.
		"""
		return (abspath for abspath, dest in self.resolveWithDestinations(context))

class _SimplePathSet(BasePathSet):
	""" The most basic PathSet which holds any combination of strings, targets and
	other PathSets.
	"""
	def __init__(self, *inputs):
		self.contents = flatten(inputs)

		for x in self.contents:
			if not (isinstance(x, (str, BasePathSet)) or hasattr(x, 'resolveToString')):
				raise BuildException('PathSet may contain only strings, PathSets, targets and lists - cannot accept %s (%s)'%(x, x.__class__))

		self.__location = BuildFileLocation()

	def __repr__(self):
		""" Return a string including this class name and the paths from which it was created. """
		return 'PathSet(%s)' % ', '.join('"%s"'%s.replace('\\','/') if isinstance(s, str) else str(s) for s in self.contents)

	def __resolveStringPath(self, p, context): # used for anything that isn't a pathset
		if hasattr(p, 'resolveToString'):
			p = p.resolveToString(context)
		p = context.getFullPath(p, defaultDir=self.__location)
		if '*' in p:
			raise BuildException('Cannot specify "*" glob patterns here (consider using FindPaths instead): "%s"'%p, location=self.__location)
		# destination is always a flat path for things specified absolutely
		return p, os.path.basename(p.rstrip('\\/'))+(os.path.sep if isDirPath(p) else '')

	def _resolveUnderlyingDependencies(self, context):
		for x in self.contents:
			if isinstance(x, BasePathSet):
				yield from x._resolveUnderlyingDependencies(context)
			else:
				yield self.__resolveStringPath(x, context)[0]

	def resolveWithDestinations(self, context):
		r = []
		for x in self.contents:
			if isinstance(x, BasePathSet):
				r.extend(x.resolveWithDestinations(context))
			else:
				r.append(self.__resolveStringPath(x, context))
		return r

NULL_PATH_SET = _SimplePathSet()
"""
A singleton PathSet containing no items.
"""

def PathSet(*items):
	"""Factory method that creates a single BasePathSet instance containing
	the specified strings, targets and/or other PathSets.

	@param items: strings, targets and PathSet objects, nested as deeply as
	you like within lists and tuples.
	The strings must be absolute paths, or paths relative to the build file
	where this PathSet is defined. Paths may not contain the '*' character, and directory
	paths must end with an explicit '/'.

	>>> str(PathSet('lib/a.jar', [('classes/', ['web.xml'])]))
	'PathSet("lib/a.jar", "classes/", "web.xml")'
	>>> [d for (s, d) in PathSet('/x/lib/a.jar', '/x/classes/', '/x/${NAME}.war').resolveWithDestinations(BaseContext({'NAME':'shop'}))]
	['a.jar', 'classes/', 'shop.war']
	>>> PathSet() is NULL_PATH_SET
	True
	"""
	if not items:
		return NULL_PATH_SET

	if len(items) == 1 and isinstance(items[0], list): # flatten a nested list
		items = items[0]
		if not items: return NULL_PATH_SET

	if len(items) == 1 and isinstance(items[0], BasePathSet): return items[0]
	return _SimplePathSet(items)

def _resolveDirPath(dir, context, location):
	"""
	Resolves a single directory path that may be either a string or a target generating a directory.

	The result is guaranteed to be expanded and to end with a trailing slash.
	"""
	if hasattr(dir, 'resolveToString'):
		dir = dir.resolveToString(context)
	else:
		dir = context.getFullPath(dir, defaultDir=location)
	if not isDirPath(dir):
		raise BuildException('Directory paths must end with an explicit / slash: "%s"'%dir, location=location)
	return dir

class DirBasedPathSet(BasePathSet):
	""" Constructs a pathset using a basedir and a list of (statically defined,
	non-globbed) basedir-relative paths within it.

	>>> [(s.replace(os.sep, '/'), d.replace(os.sep, '/')) for (s, d) in DirBasedPathSet('/src/${DIR}/', 'a.jsp', 'images/', 'js/app.js').resolveWithDestinations(BaseContext({'DIR':'web'}))]
	[('/src/web/a.jsp', 'a.jsp'), ('/src/web/images/', 'images/'), ('/src/web/js/app.js', 'js/app.js')]
	>>> DirBasedPathSet('/src/', 'a*b').resolve(BaseContext({}))
	Traceback (most recent call last):
	...
	jarpack.utils.buildexceptions.BuildException: Cannot specify "*" patterns here (consider using FindPaths instead): "a*b"
	"""
	def __init__(self, dir, *children):
		"""
		@param dir: the base directory, which may include substitution variables, and must end with a '/'.
		May be a string or a target that generates a directory.

		@param children: strings defining the child files or dirs, which may
		include ${...} variables but not '*' expansions.
		"""
		self.__dir = dir
		self.__children = flatten(children)
		self.__location = BuildFileLocation()

	def __repr__(self):
		return 'DirBasedPathSet(%s, %s)' % (self.__dir, self.__children)

	def _resolveUnderlyingDependencies(self, context):
		if hasattr(self.__dir, 'resolveToString'):
			return [self.__dir.resolveToString(context)]
		return super(DirBasedPathSet, self)._resolveUnderlyingDependencies(context)

	def resolveWithDestinations(self, context):
		dir = _resolveDirPath(self.__dir, context, self.__location)

		result = []
		for c in self.__children:
			c = context.expandPropertyValues(c).strip()
			if '*' in c:
				raise BuildException('Cannot specify "*" patterns here (consider using FindPaths instead): "%s"'%c, location=self.__location)
			if os.path.isabs(c):
				raise BuildException('Cannot specify absolute path "%s", as all paths must be relative to the base directory %s'%(c, self.__dir), location=self.__location)
			isdir = isDirPath(c)
			c = os.path.normpath(os.path.join(dir, c).rstrip('\\/'))
			if isdir: c = c+os.path.sep
			result.append( ( c, c[len(dir):] ) )
		return result

def antGlobToRegex(pattern):
	""" Converts an ant-style glob pattern to a compiled regular expression matching /-separated relative paths.

	``*`` matches within a single path element and ``**`` matches zero or more path elements.

	>>> bool(antGlobToRegex('**/*.jar').match('lib/x/a.jar'))
	True
	>>> bool(antGlobToRegex('**/*.jar').match('a.jar'))
	True
	>>> bool(antGlobToRegex('*.jar').match('lib/a.jar'))
	False
	>>> bool(antGlobToRegex('WEB-INF/**').match('WEB-INF/lib/a.jar'))
	True
	"""
	result = ''
	for i, element in enumerate(pattern.split('/')):
		last = i == len(pattern.split('/'))-1
		if element == '**':
			result += '.*' if last else '(?:[^/]+/)*'
			continue
		result += ''.join('[^/]*' if ch == '*' else '[^/]' if ch == '?' else re.escape(ch) for ch in element)
		if not last: result += '/'
	return re.compile(result+'$')

class FindPaths(BasePathSet):
	""" A lazily-evaluated PathSet that uses ``*`` and ``**`` (ant-style) globbing
	to dynamically discover files under a common parent directory.

	Matching is case-sensitive, and it is an error if the directory does not exist. The result is sorted to
	ensure determinism, and destination paths are the paths underneath the base dir.

	>>> str(FindPaths('web/', includes=['**/*.jsp'], excludes=['**/test/**']))
	'FindPaths("web/", includes=["**/*.jsp"], excludes=["**/test/**"])'
	>>> FindPaths('web/', includes=['/abs/*.jsp'])
	Traceback (most recent call last):
	...
	jarpack.utils.buildexceptions.BuildException: Invalid includes/excludes pattern in FindPaths - must not contain \\, begin with / or contain substitution variables: "/abs/*.jsp"
	"""
	def __init__(self, dir, excludes=None, includes=None):
		"""
		@param dir: base directory to search (relative or absolute, may contain ${...} variables), or a target
		that generates a directory.

		@param includes: a list of glob patterns for the files to include (excluding all others); default is ``**``

		@param excludes: a list of glob patterns to exclude after processing any includes.
		"""
		self.__dir = dir
		self.includes = flatten(includes)
		self.excludes = flatten(excludes)

		bad = [x for x in (self.includes+self.excludes) if ('//' in x or x.startswith('/') or '\\' in x or '${' in x)]
		if bad:
			raise BuildException('Invalid includes/excludes pattern in FindPaths - must not contain \\, begin with / or contain substitution variables: "%s"'%bad[0])

		self.__includeRegexes = [antGlobToRegex(p) for p in (self.includes or ['**'])]
		self.__excludeRegexes = [antGlobToRegex(p) for p in self.excludes]
		self.location = BuildFileLocation()
		self.__cached = None

	def __repr__(self):
		return ('FindPaths(%s, includes=%s, excludes=%s)'%('"%s"'%self.__dir if isinstance(self.__dir, str) else str(self.__dir), self.includes, self.excludes)).replace('\'','"')

	def _resolveUnderlyingDependencies(self, context):
		if hasattr(self.__dir, 'resolveToString'):
			return [self.__dir.resolveToString(context)]
		return super(FindPaths, self)._resolveUnderlyingDependencies(context)

	def resolveWithDestinations(self, context):
		"""
		Uses the file system to return the files matching the include/exclude patterns.

		This method caches its result after being called the first time.
		"""
		if self.__cached is not None: return self.__cached
		log = logging.getLogger('FindPaths')

		dir = _resolveDirPath(self.__dir, context, self.location)
		if not os.path.isdir(dir):
			raise BuildException('FindPaths root directory does not exist: "%s"'%dir, location=self.location)

		result = []
		for root, dirs, files in os.walk(dir):
			dirs.sort()
			for f in sorted(files):
				src = os.path.join(root, f)
				dest = src[len(dir):].replace(os.sep, '/')
				if not any(r.match(dest) for r in self.__includeRegexes): continue
				if any(r.match(dest) for r in self.__excludeRegexes): continue
				result.append((src, dest))
		log.debug('FindPaths found %d files under %s', len(result), dir)
		self.__cached = result
		return result

class _DerivedPathSet(BasePathSet):
	def __init__(self, pathSet):
		if not isinstance(pathSet, BasePathSet): pathSet = PathSet(pathSet)
		self._pathSet = pathSet
	def _resolveUnderlyingDependencies(self, context):
		return self._pathSet._resolveUnderlyingDependencies(context)

class AddDestPrefix(_DerivedPathSet):
	""" Adds a specified prefix on to the destinations of the specified PathSet
	(the PathSet's source paths are unaffected).

	e.g. AddDestPrefix('WEB-INF/lib/', libs)

	>>> [d.replace(os.sep, '/') for (s, d) in AddDestPrefix('WEB-INF/lib/', PathSet('/x/a.jar', '/x/b.jar')).resolveWithDestinations(BaseContext({}))]
	['WEB-INF/lib/a.jar', 'WEB-INF/lib/b.jar']
	>>> [d.replace(os.sep, '/') for (s, d) in AddDestPrefix('/META-INF/', DirBasedPathSet('/x/', 'wsdl/')).resolveWithDestinations(BaseContext({}))]
	['META-INF/wsdl/']
	>>> str(AddDestPrefix('lib/', PathSet('a.jar')))
	'AddDestPrefix(prefix="lib/", PathSet("a.jar"))'
	"""
	def __init__(self, prefix, pathSet):
		"""
		@param prefix: a string that should be added to the beginning of each dest
		path. Usually this will end with a slash '/'.

		@param pathSet: either a PathSet object of some type or something from which a
		path set can be constructed.
		"""
		_DerivedPathSet.__init__(self, pathSet)
		self.__prefix = prefix.lstrip('\\/')

	def __repr__(self):
		return 'AddDestPrefix(prefix="%s", %s)' % (self.__prefix, self._pathSet)

	def resolveWithDestinations(self, context):
		result = self._pathSet.resolveWithDestinations(context)
		prefix = context.expandPropertyValues(self.__prefix).lstrip('\\/')
		return [(key, os.path.normpath(prefix+value)+(os.path.sep if isDirPath(key) else '')) for (key,value) in result]

class SingletonDestRenameMapper(_DerivedPathSet):
	""" Uses the specified hardcoded destination name for the specific file
	(and checks only a single input is supplied).
	Properties in the specified destination string will be expanded.

	e.g. SingletonDestRenameMapper('META-INF/services.xml', 'src/axis2-services.xml')

	>>> str(SingletonDestRenameMapper('META-INF/services.xml', 'src/axis2-services.xml'))
	'SingletonDestRenameMapper(META-INF/services.xml, PathSet("src/axis2-services.xml"))'
	>>> [d for (s, d) in SingletonDestRenameMapper('META-INF/services.xml', '/x/axis2-services.xml').resolveWithDestinations(BaseContext({}))]
	['META-INF/services.xml']
	"""
	def __init__(self, newDestRelPath, pathSet):
		"""
		@param newDestRelPath: Replacement destination path (including file name)

		@param pathSet: The input path or PathSet, which must contain a single file.
		"""
		_DerivedPathSet.__init__(self, pathSet)
		self.newDestRelPath = newDestRelPath
		assert '\\' not in self.newDestRelPath

	def __repr__(self):
		""" Return a string including this class name, the new destination and the included PathSet. """
		return 'SingletonDestRenameMapper(%s, %s)' % (self.newDestRelPath, self._pathSet)

	def resolveWithDestinations(self, context):
		result = self._pathSet.resolveWithDestinations(context)
		if len(result) != 1: raise BuildException('This pathset can only be used with a single path: %s'%self)
		return [(result[0][0], context.expandPropertyValues(self.newDestRelPath))]
