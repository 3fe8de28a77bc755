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
Contains the contexts that hold property values, option values and the registered targets: `BuildInitializationContext`
which is used while build files are being loaded, and `BuildContext` which is passed to each target while it builds.
"""

import sys, os, time, traceback, types

from jarpack.utils.buildfilelocation import BuildFileLocation
from jarpack.utils.buildexceptions import BuildException
from jarpack.utils.fileutils import isDirPath
from jarpack.buildcommon import normpath

import logging
log = logging.getLogger('jarpack')

DEFAULT_BUILD_FILE = 'root.jarpack.py'

class BaseContext(object):
	""" Common functionality needed during initialization and build phases.
	"""

	def __init__(self, initialProperties=None):
		"""
		@param initialProperties: a dictionary of initial property values;
		used by doc tests.
		"""
		self._properties = dict(initialProperties or {})

	def getPropertyValue(self, name):
		""" Get the value of the specified property or raise a BuildException if it doesn't exist.

		@param name: the property name (without ${...}) to retrieve. Must be a string.

		@return: For Boolean properties this will be a python Boolean, for everything else it will be a string.

		>>> BaseContext({'A':'b','APP_VERSION':'1.0'}).getPropertyValue('APP_VERSION')
		'1.0'
		>>> BaseContext({'A':False}).getPropertyValue('A')
		False
		>>> BaseContext({'A':'b'}).getPropertyValue('UNDEFINED_PROPERTY')
		Traceback (most recent call last):
		...
		jarpack.utils.buildexceptions.BuildException: Property "UNDEFINED_PROPERTY" is not defined
		"""
		result = self._properties.get(name)
		if result is None:
			# the always-defined properties are only defined on demand, in case the build wants to override them
			init = BuildInitializationContext.getBuildInitializationContext()
			if init is None or init is not self:
				raise BuildException('Property "%s" is not defined'%name)
			if name == 'OUTPUT_DIR':
				outputDir = init.defineProperty('OUTPUT_DIR', init._rootDir+'/'+'buildoutput', coerceToValidValue=normpath)
				init.registerOutputDir(outputDir)
			elif name == 'BUILD_WORK_DIR':
				init.defineProperty('BUILD_WORK_DIR', os.path.normpath(init.getPropertyValue('OUTPUT_DIR')+'/BUILD_WORK'))
			elif name == 'LOG_FILE':
				init.defineProperty('LOG_FILE', os.path.abspath('build.log'))
			else:
				raise BuildException('Property "%s" is not defined'%name)
			result = self._properties.get(name)
			assert result is not None, name

		return result

	def expandPropertyValues(self, string):
		""" Expand all ${PROP_NAME} properties in the specified string.

		Use a double dollar to escape if needed, e.g. "$${foo}" will end up as
		"${foo}" unescaped.

		Boolean values are expanded to "true" or "false".

		@param string: The string with unexpanded properties in ${...} to expand.
		May alternatively be an object with a resolveToString method (such as a target), or a function that accepts
		a single argument containing the context.

		>>> BaseContext({'A':'b'}).expandPropertyValues(None)
		>>> BaseContext({'A':'b'}).expandPropertyValues('')
		''
		>>> BaseContext({'V':'1.0'}).expandPropertyValues('Implementation-Version: ${V} (${V})')
		'Implementation-Version: 1.0 (1.0)'
		>>> BaseContext({'A':'a'}).expandPropertyValues('x${A}x$${A}x')
		'xax${A}x'
		>>> BaseContext({'A':True}).expandPropertyValues('sealed=${A}')
		'sealed=true'
		>>> BaseContext({'A':'b'}).expandPropertyValues('${A')
		Traceback (most recent call last):
		...
		jarpack.utils.buildexceptions.BuildException: Incorrectly formatted property string "${A"
		"""
		if not string: return string
		if hasattr(string, 'resolveToString'):
			string = string.resolveToString(self)
		if callable(string): string = string(self)
		assert isinstance(string, str), 'Error in expandPropertyValues: expecting string but argument was of type "%s"'%(string.__class__.__name__)

		if '$${' in string:
			assert '<escaped_jarpack_placeholder>' not in string
			string = string.replace('$${', '<escaped_jarpack_placeholder>')

		while '${' in string:
			start = string.index('${')
			end = string.find('}', start)
			if end < 0: raise BuildException('Incorrectly formatted property string "%s"'%string)
			propName = string[start+2:end]
			v = self.getPropertyValue(propName)
			# other languages do not use Initialcaps for their booleans
			if isinstance(v, bool): v = 'true' if v else 'false'
			string = string.replace('${%s}' % propName, v)

		return string.replace('<escaped_jarpack_placeholder>', '${')

	def getProperties(self):
		"""
		Return a new copy of the properties dictionary.

		>>> BaseContext({'A':'b'}).getProperties()
		{'A': 'b'}
		"""
		return self._properties.copy()

	def _recursiveExpandProperties(self, obj):
		"""
		Recurses over obj, replacing any strings it finds.

		>>> BaseContext({'test':'foo'})._recursiveExpandProperties(['${test}', ('${test}', 1)])
		['foo', ('foo', 1)]
		>>> BaseContext({'test':'foo'})._recursiveExpandProperties({'${test}':'${test}'})
		{'foo': 'foo'}
		"""
		if isinstance(obj, str):
			return self.expandPropertyValues(obj)
		elif isinstance(obj, tuple):
			return tuple(self._recursiveExpandProperties(i) for i in obj)
		elif isinstance(obj, list):
			return [self._recursiveExpandProperties(i) for i in obj]
		elif isinstance(obj, dict):
			newobj = {}
			for k in obj:
				newobj[self._recursiveExpandProperties(k)] = self._recursiveExpandProperties(obj[k])
			return newobj
		else: return obj

	def _mergeListOfOptionDicts(self, dicts, target=None):
		# creates a new dictionary; target is used just for error reporting, if available
		fulloptions = {}
		for source in dicts:
			if source is None: continue

			for key in source:
				try:
					if key not in BuildInitializationContext._definedOptions: raise BuildException("Unknown option %s" % key)
					fulloptions[key] = self._recursiveExpandProperties(source[key])
				except BuildException:
					raise BuildException('Failed to resolve option "%s"'%key, location=target.location if target else None, causedBy=True)
		return fulloptions

	def getGlobalOption(self, key):
		"""Get the value of the specified global option for this build.

		In any situation where there is a target, use `BaseTarget.getOption` instead, so that per-target
		option overrides are respected. """
		return self._globalOptions[key]

	def getFullPath(self, path, defaultDir):
		""" Expands any properties in the specified path, then removes trailing path separators, normalizes it for this
		platform and then makes it an absolute path if necessary, using the specified default directory.

		@param path: a string representing a relative or absolute path.

		@param defaultDir: the default parent directory to use if this is a
		relative path; it is invalid to pass None for this parameter.
		It is permitted to pass a BuildFileLocation for the defaultDir instead
		of a string, which is used by objects like PathSets that capture location
		when they are instantiated.

		>>> BaseContext({'DEF':'output', 'EL':'element'}).getFullPath('path/${EL}', '${DEF}').replace('\\\\','/')
		'output/path/element'
		>>> BaseContext({'DEF':'output/', 'EL':'element'}).getFullPath('path/../path/${EL}/', '${DEF}').replace('\\\\','/')
		'output/path/element/'
		>>> BaseContext({'EL':'element'}).getFullPath('/path/${EL}', 'output').replace('\\\\','/')
		'/path/element'
		"""
		assert defaultDir # non-empty string or BuildFileLocation

		orig = path
		path = self.expandPropertyValues(path)
		isdir = isDirPath(path)
		if len(path) == 0 or (isdir and len(path)==1): raise BuildException('Invalid path "%s" expanded from "%s"'%(path, orig))
		if not os.path.isabs(path):
			if isinstance(defaultDir, BuildFileLocation):
				defaultDir = defaultDir.buildDir
				# a non-build exception, since this indicates a bug in the object that captured the location
				if not defaultDir: raise Exception(
					'Cannot resolve relative path \'%s\' because the build file location is not available at this point; please either use an absolute path or ensure the associated object (e.g. PathSet) is instantiated while loading build files not while building targets'%path)
			else:
				defaultDir = self.expandPropertyValues(defaultDir)
			path = os.path.join(defaultDir, path)
		path = os.path.normpath(path.rstrip('\\/'))
		if isdir and not path.endswith(os.path.sep): path = path+os.path.sep
		return path

class BuildInitializationContext(BaseContext):
	"""
	Provides context used only during the initialization phase of the build, including the ability to change property
	values that will later become immutable. Once initialization is complete, this object should be considered
	immutable.
	"""

	# option definitions are static, so that re-loading a build file with a new context does not lose the
	# definitions from target modules, which are only imported once
	_definedOptions = {}

	__buildInitializationContext = None

	def __init__(self, propertyOverrides):
		"""
		Should only be called from within jarpack, not from build files.

		@param propertyOverrides: property override values specified by the user on the command line; all values must be
		of type string.
		"""
		BaseContext.__init__(self)

		self._propertyOverrides = dict(propertyOverrides)

		self._targetsMap = {} # name:target object
		self._targetsList = [] # target objects, in definition order
		self._tags = {} # tagName:list of targets
		self._outputDirs = set()
		self._initializationCompleted = False
		self._globalOptions = {}
		self._rootDir = os.getcwd()
		self.__isRealBuild = True

	@staticmethod
	def getBuildInitializationContext():
		"""Returns the singleton `BuildInitializationContext` instance during parsing of build files,
		or None if no build file is being parsed (e.g. in doc tests).
		"""
		context = BuildInitializationContext.__buildInitializationContext
		if not isinstance(context, BuildInitializationContext): return None
		return context

	def initializeFromBuildFile(self, buildFile, isRealBuild=True):
		""" Load the specified build file, which is the initialization phase during which properties are defined and
		the build file target definitions will register themselves with this object.

		Should only be called from within jarpack, not from build files. To include another build file
		instead use `jarpack.buildcommon.include`.

		@param buildFile: The path to the build file to load.
		@param isRealBuild: True if this is going to be a real build, not just listing available targets etc
		"""
		self.__isRealBuild = isRealBuild
		if os.path.isdir(buildFile): buildFile = os.path.join(buildFile, DEFAULT_BUILD_FILE)
		buildFile = os.path.abspath(buildFile)
		sys.path.append(os.path.dirname(buildFile))
		startTime = time.time()
		log.debug("Loading build file %s", buildFile)
		BuildInitializationContext.__buildInitializationContext = self
		self._rootDir = os.path.dirname(buildFile)

		try:
			BuildFileLocation._currentBuildFile = [buildFile]
			with open(buildFile, "rb") as f:
				exec(compile(f.read(), buildFile, 'exec'), {})
		except BuildException as e:
			log.error('Failed to load build file: %s', e.toSingleLineString(None), extra=e.getLoggerExtraArgDict())
			log.debug('Failed to load build file: %s', traceback.format_exc())
			raise
		except Exception:
			log.exception('Failed to load build file: ')
			# wrap in a BuildException to avoid printing same stack trace twice
			raise BuildException('Failed to load build file', causedBy=True)
		finally:
			BuildFileLocation._currentBuildFile = []

		log.info('Loaded build files in %0.1f seconds', (time.time()-startTime))

		# ensure special properties have been set, even if the build file didn't use them
		for p in ['OUTPUT_DIR', 'BUILD_WORK_DIR', 'LOG_FILE']:
			self.getPropertyValue(p)

		BuildInitializationContext.__buildInitializationContext = 'build phase'
		self._initializationCompleted = True

		# all the valid ones will have been popped already
		if self._propertyOverrides:
			raise BuildException('Cannot specify value for undefined build property/properties: %s'%(', '.join(sorted(self._propertyOverrides.keys()))))

	def _finalizeGlobalOptions(self): # internal method called at end of build initialization phase
		self._globalOptions = types.MappingProxyType(self._mergeListOfOptionDicts([
			BuildInitializationContext._definedOptions, self._globalOptions]))

	def _initializationCheck(self):
		if self._initializationCompleted: raise Exception('Cannot invoke this method now that the initialization phase is over')

	def defineProperty(self, name, default, coerceToValidValue=None):
		""" Defines a user-settable property, specifying a default value and
		an optional method to validate values specified by the user.
		Return the value assigned to the property.

		Build files should not use this directly, but instead call `jarpack.propertysupport.defineStringProperty`
		et al.

		@param name: must be UPPER_CASE
		@param default: If set to None, the property must be set on the command line each time
		@param coerceToValidValue: None, or a function to validate and/or convert the input string to a value of the right
		type
		"""
		self._initializationCheck()

		if name.upper() != name:
			raise BuildException('Invalid property name "%s" - all property names must be upper case'%name)

		if name in self._properties:
			raise BuildException('Cannot set the value of property "%s" more than once'%name)

		value = self._propertyOverrides.get(name)
		if value is None: value = default

		if value is None:
			raise BuildException('Property "%s" must be set on the command line' % name)

		# from this point onwards value may not be a string (e.g. could be a boolean)
		if coerceToValidValue:
			value = coerceToValidValue(value)

		self._properties[name] = value

		# remove if still present, so we can tell if user tries to set any undefined properties
		self._propertyOverrides.pop(name, None)

		log.info('Setting property %s=%s', name, value)
		return value

	def registerOutputDir(self, outputDir):
		""" Registers that the specified directory should be created before the
		build starts, and deleted by a clean.

		Build files should use `jarpack.propertysupport.defineOutputDirProperty`
		instead of calling this function directly.
		"""
		self._initializationCheck()
		self._outputDirs.add(outputDir)

	def registerTarget(self, target):
		""" Registers the target with the context.

		Called internally from `jarpack.basetarget.BaseTarget` and does not need to be called directly.
		"""
		self._initializationCheck()

		if target.name in self._targetsMap:
			raise BuildException('Duplicate target name "%s" (%s)' % (target, self._targetsMap[target.name].location), location=target.location)
		self._targetsMap[target.name] = target
		self._targetsList.append(target)
		self.registerTags(target, target.getTags())

	def registerTags(self, target, taglist):
		""" Registers tags and their matching targets with the context.

		Called internally from `jarpack.basetarget.BaseTarget.tags` and does not need to be called directly.
		"""
		for t in taglist:
			self._tags.setdefault(t, []).append(target)

	def isRealBuild(self):
		""" Returns True if a real build is going to take place, or False if
		the build files are just being parsed in order to list available
		targets/properties.
		"""
		return self.__isRealBuild

	def getTargetsWithTag(self, tag):
		""" Returns the list of target objects with the specified tag name
		(throws BuildException if not defined).
		"""
		result = list(self._tags.get(tag, []))
		if not result:
			raise BuildException('Tag "%s" is not defined for any target in the build'%tag)
		return result

	def tags(self):
		""" Returns the map of tag names to lists of target objects
		"""
		return self._tags

	def targets(self):
		""" Return a map of targetName:target
		"""
		return self._targetsMap

	def getTargetsList(self):
		""" Return the list of targets in the order they were defined. """
		return list(self._targetsList)

	def getOutputDirs(self):
		""" Return the list of registered output dirs.
		Note that some of these might be nested inside other output dirs.
		"""
		return self._outputDirs

	@staticmethod
	def _defineOption(name, default):
		""" Register an available option and specify its default value.

		Called internally from `jarpack.propertysupport.defineOption` and does not
		need to be called directly
		"""
		if name in BuildInitializationContext._definedOptions and BuildInitializationContext._definedOptions[name] != default:
			raise BuildException('Cannot define option "%s" more than once'%name)

		BuildInitializationContext._definedOptions[name] = default

	def setGlobalOption(self, key, value):
		""" Set a global value for an option

		Called internally from `jarpack.propertysupport.setGlobalOption` and does not
		need to be called directly
		"""
		if not key in BuildInitializationContext._definedOptions:
			raise BuildException("Cannot specify value for option that has not been defined \"%s\"" % key)
		if key in self._globalOptions:
			log.warning("Resetting global option %s to %s at %s", key, value, BuildFileLocation().getLineString())
		else:
			log.info("Setting global option %s to %s at %s", key, value, BuildFileLocation().getLineString())
		self._globalOptions[key] = value

class BuildContext(BaseContext):
	"""
	Provides context used only during the build phase of the build (after initialization is complete),
	i.e. the ability to expand variables (but not to change their value).
	"""
	def __init__(self, initializationContext):
		""" Create a BuildContext from a `BuildInitializationContext`.

		Should not be used directly, will be passed into each target's run method.
		"""
		BaseContext.__init__(self, initializationContext.getProperties())
		self.init = initializationContext

		self._globalOptions = initializationContext._globalOptions # unmodifiable at this point

	def getTargetsWithTag(self, tag):
		""" Returns the list of target objects with the specified tag name
		(throws BuildException if not defined).
		"""
		return self.init.getTargetsWithTag(tag)

getBuildInitializationContext = BuildInitializationContext.getBuildInitializationContext
