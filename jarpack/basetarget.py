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
Contains `jarpack.basetarget.BaseTarget` which contains
methods such as `BaseTarget.option` and `BaseTarget.tags` for configuring the target instances
in your build files, and is also the base class for defining new targets.
"""

import os, re

import jarpack.buildcontext
from jarpack.buildcontext import getBuildInitializationContext
import jarpack.utils.fileutils as fileutils
from jarpack.utils.flatten import getStringList
from jarpack.utils.buildfilelocation import BuildFileLocation
from jarpack.utils.buildexceptions import BuildException

import logging

class BaseTarget(object):
	""" The base class for all targets.

	.. rubric:: Configuring targets in your build files

	The following methods can be used to configure any target instance you add to a build file:

	.. autosummary ::
		option
		tags
		setArtifactId
		addCompletionListener

	.. rubric:: Implementing a new target class

	If you are subclassing ``BaseTarget`` to create a new target class, you must implement `run`.
	The following methods are available for use by target subclasses:

	.. autosummary ::
		registerImplicitInputOption
		registerImplicitInput
		getOption
		targetNameToUniqueId

	This class provides several read-only attributes for use by subclasses.

	:ivar str name: The canonical name for the target (containing unsubstituted properties).

	:ivar str path: The resolved name with all properties variables expanded. This field is set only once the target is
		running or checking up-to-dateness but not during initialization phase when targets are initially constructed.

	:ivar dict options: A ``dict`` of the resolved options for this target. See also `getOption()`.

	:ivar str workDir: A unique dedicated directory where this target can write temporary/working files.

	.. rubric:: Arguments for the BaseTarget __init__ constructor

	@param name: This target instance's unique name, which is the file or
		directory path which is created as a result of running this target.
		The target name may contain ``${...}`` properties (e.g.
		``${OUTPUT_DIR}/shop.war``), and must use only forward slashes ``/``.
		If the target builds a directory it must end with a forward slash.

	@param dependencies: The dependencies; may be any combination of
		strings, `jarpack.pathsets` and lists, and may also contain
		unexpanded variables.
	"""

	artifactType = None
	"""
	The kind of artifact this target produces (e.g. ``war`` or ``ejb``), used when it is added to an EAR without an
	explicit type. None for targets that are not Java archives.
	"""

	def __hash__(self):
		"""
		Uses the target name to generate a hash. Targets are required to produce unique outputs.
		"""
		return hash(self.name)

	def __init__(self, name, dependencies):
		self.__getAttrImpl = {
			'path': lambda: self.__returnOrRaiseIfNone(self.__path, 'Target path has not yet been resolved by this phase of the build process: %s'%self),
			'name': lambda: self.__name,
			'options': lambda: self.__returnOrRaiseIfNone(self.__optionsResolved, "Cannot read the value of the target's options during the initialization phase of the build as the resolved option values are not yet available"),
			'workDir': lambda: self.__workDir,
			'type': lambda: self.__class__.__name__,
			'baseDir': lambda: self.location.buildDir,
			'artifactId': lambda: self.__artifactId,
		}

		self.__optionsTargetOverridesUnresolved = {}
		self.__optionsResolved = None # gets assigned during end of initialization phase

		if isinstance(name, str):
			if '//' in name:
				raise BuildException('Invalid target name: double slashes are not permitted: %s'%name)
			if '\\' in name:
				raise BuildException('Invalid target name: backslashes are not permitted: %s'%name)
		self.__name = str(name)
		self.__path_src = name
		self.__tags = ['full']
		self.__artifactId = None
		self.__completionListeners = []
		self.log = logging.getLogger(self.__class__.__name__)

		# put the class first, since it results in better ordering (e.g. for errors)
		self.__stringvalue = '<%s> %s'%(self.type, self.name)

		init = getBuildInitializationContext()
		if not init: # doc-test mode
			self.location = BuildFileLocation(raiseOnError=False)
		else:
			self.location = BuildFileLocation(raiseOnError=True)
			init.registerTarget(self) # this can throw

		self.__dependencies = PathSet(dependencies)

		self.__path = None # set by _resolveTargetPath
		self.__workDir = None

		self.__registeredImplicitInputs = []

	def __returnOrRaiseIfNone(self, value, exceptionMessage):
		if value is not None: return value
		raise Exception(exceptionMessage)

	def __getattr__(self, name):
		""" Getter for read-only attributes """
		# nb this is not called for fields that have been set explicitly using self.X = ...
		try:
			return self.__getAttrImpl[name]()
		except KeyError:
			raise AttributeError('Unknown attribute %s'%name)

	def __str__(self): # string display name which is used for log statements etc
		""" Returns a display name including the target name and the target type (class) """
		return self.__stringvalue

	def resolveToString(self, context):
		"""
		Resolves this target's path and returns it as a string.

		There is usually no need for this to be called other than by the framework, and by PathSets containing targets.
		"""
		# if there's no explicit parent, default to ${OUTPUT_DIR} to stop
		# people accidentally writing to their source directories
		if self.__path is not None: return self.__path # cache it for consistency
		self.__path = context.getFullPath(self.__path_src, context.getPropertyValue("OUTPUT_DIR"))

		badchars = '<>:"|?*'
		foundbadchars = [c for c in self.__path[2:] if c in badchars] # (nb: ignore first 2 chars of absolute path which will necessarily contain a colon on Windows)
		if foundbadchars: raise BuildException('Invalid character(s) "%s" found in target name %s'%(''.join(sorted(set(foundbadchars))), self.__path))

		self.log.debug('Resolved target name %s to canonical path %s', self.name, self.path)
		return self.__path

	def _resolveTargetPath(self, context):
		"""Internal method for resolving path from name, performing any
		required expansion etc.

		Do not override or call this method.

		@param context: The initialization context, with all properties and options fully defined.
		"""
		self.resolveToString(context)

		# do this early (before deps resolution) so it can be used for clean
		self.__workDir = os.path.normpath(context.getPropertyValue("BUILD_WORK_DIR")+'/targets/'+self.__class__.__name__+'/'+targetNameToUniqueId(self.name))

		# take the opportunity to provide a merged set of options
		if len(self.__optionsTargetOverridesUnresolved)==0:
			self.__optionsResolved = context._globalOptions # since is immutable so we can avoid a copy
		else:
			self.__optionsResolved = context._mergeListOfOptionDicts([context._globalOptions, self.__optionsTargetOverridesUnresolved], target=self)

	def _resolveUnderlyingDependencies(self, context):
		"""Internal method for resolving the paths of the dependencies needed by this target.

		Do not override this method. This method should be invoked only once,
		by the scheduler.
		"""
		return self.__dependencies._resolveUnderlyingDependencies(context)

	def run(self, context):
		"""Called by jarpack to request the target to run its build (all targets must implement this).

		This method is only called when up-to-date checking shows that the target must be built.
		"""
		raise Exception('run() is not implemented yet for this target')

	def clean(self, context):
		"""Called by jarpack when the target should be deleted (can be overridden if needed).

		The default implementation will simply delete the target, and any target
		workdir.
		"""
		try:
			if self.workDir:
				fileutils.deleteDir(self.workDir)
		finally:
			if os.path.isdir(self.path):
				self.log.info('Target clean is deleting directory: %s', self.path)
				fileutils.deleteDir(self.path)
			else:
				fileutils.deleteFile(self.path)

	def registerImplicitInputOption(self, optionKey):
		"""Target classes can call this from their ``__init__()`` to add the resolved value of the specified option
		as an 'implicit input' of this target.

		This list will be written to disk after the target builds successfully, and compared with its recorded value
		when subsequently checking the up-to-date-ness of the target.
		This allows jarpack to detect when the target should be rebuilt as a result of a change in options,
		even if no dependencies have changed.

		@param optionKey: the name of an option (as a string),
			or a callable that accepts an optionKey and returns True if it should be included, for example::

				self.registerImplicitInputOption(lambda optionKey: optionKey.startswith('jar.manifest.'))
		"""
		self.registerImplicitInput(lambda context: self.__getMatchingOptions(context, optionKey))

	def __getMatchingOptions(self, context, optionKey):
		if callable(optionKey):
			keys = [k for k in self.options if optionKey(k)]
		else:
			keys = [optionKey]
		result = []
		for k in sorted(keys):
			x = self.options[k]
			if callable(x) and hasattr(x, '__qualname__'):
				value = x.__qualname__ # avoid 0x references for top-level functions
			else:
				value = repr(x)
			result.append('option %s=%s'%(k, value))
		return result

	def registerImplicitInput(self, item):
		"""Target classes can call this from their ``__init__()`` to add the specified string line(s) as
		'implicit inputs' of this target.

		This list will be written to disk after the target builds successfully, and compared with its recorded value
		when subsequently checking the up-to-date-ness of the target.

		@param item: The item to be added to the implicit inputs. This can be either:

				- a string, which may contain substitution variables, e.g. ``displayName="${APP_NAME}"``,
				  and will be converted to a string using `jarpack.buildcontext.BaseContext.expandPropertyValues`, or
				- a callable to be invoked during up-to-dateness checking, that accepts a
				  context parameter and returns a string or list of strings;
				  any ``None`` items in the list are ignored.
		"""
		assert isinstance(item, str) or callable(item)
		self.__registeredImplicitInputs.append(item)

	def getHashableImplicitInputs(self, context):
		""" Returns the resolved list of implicit input lines registered for this target. """
		result = []
		for x in self.__registeredImplicitInputs:
			if callable(x) and not hasattr(x, 'resolveToString'):
				x = x(context)
				if x is None:
					continue
				elif isinstance(x, str):
					result.append(x)
				else: # assume it's a list or other iterable
					result.extend(y for y in x if y is not None)
			else:
				result.append(context.expandPropertyValues(x))
		return result

	def getTags(self):
		"""
		@returns: The list of tags associated with this target. """
		return self.__tags

	def getOption(self, key, errorIfNone=True, errorIfEmptyString=True):
		""" Target classes can call this during `run` or `clean` to get the resolved value of a specified option for
		this target, with optional checking to give a friendly error message if the value is an empty string or None.

		This method cannot be used while the build files are still being loaded, only during the execution of the targets.
		"""
		if key not in self.options: raise Exception('Target tried to access an option key that does not exist: %s'%key)
		v = self.options[key]
		if (errorIfNone and v is None) or (errorIfEmptyString and v == ''):
			raise BuildException('This target requires a value to be specified for option "%s" (see basetarget.option or setGlobalOption)'%key)
		return v

	def option(self, key, value):
		"""Called by build file authors to configure this target instance with an override for an option value.

		If no override is provided, the value set in `jarpack.propertysupport.setGlobalOption` for the whole build
		is used, or if that was not set then the default when the option was defined.

		@param key: The name of a previously-defined option.

		@param value: The value. If the value is a string and contains any property values these will be expanded
		before the option value is passed to the target.
		"""
		self.__optionsTargetOverridesUnresolved[key] = value
		return self

	def tags(self, *tags):
		"""Called by build file authors to append one or more tags to this target to make groups of related targets
		easier to build (or just to provide a shorter alias for the target on the command line).

		@param tags: The tag, tags or list of tags to add to the target.

		>>> BaseTarget('a.jar',[]).tags('abc').getTags()
		['abc', 'full']
		>>> BaseTarget('a.jar',[]).tags(['abc', 'def']).tags('ghi').getTags()
		['ghi', 'abc', 'def', 'full']
		"""
		taglist = getStringList(list(tags[0]) if len(tags) == 1 and isinstance(tags[0], (list, tuple)) else list(tags))
		self.__tags = taglist + self.__tags
		assert sorted(set(self.__tags)) == sorted(self.__tags) # check for duplicates
		init = getBuildInitializationContext()
		if init: init.registerTags(self, taglist) # init will be None during doctests
		return self

	def setArtifactId(self, artifactId):
		"""Called by build file authors to set the identifier of the artifact this target produces, which is used
		as the module id when it is added to an EAR (the default is the file name without its extension).

		>>> BaseTarget('${OUTPUT_DIR}/shop-1.0.war', []).setArtifactId('shop').artifactId
		'shop'
		"""
		self.__artifactId = artifactId
		return self

	def addCompletionListener(self, listener):
		"""Register a function to be called each time this target has been successfully built.

		Listeners are called in the order they were added, with the target and the `jarpack.buildcontext.BuildContext`
		as arguments, and are not called if the target was already up-to-date. An exception from a listener
		causes the target to fail.
		"""
		assert callable(listener), listener
		self.__completionListeners.append(listener)
		return self

	def _notifyCompletionListeners(self, context):
		"""Internal method called by the scheduler after this target has run. """
		for listener in self.__completionListeners:
			listener(self, context)

	@staticmethod
	def targetNameToUniqueId(name):
		"""Convert a target name (containing unexpanded property values) into a convenient unique identifier.

		The resulting identifier is not an absolute path, and (unless very long) does not contain any directory
		elements. This id is suitable for temporary filenames and directories etc

		>>> BaseTarget.targetNameToUniqueId('${OUTPUT_DIR}/ears/shop.ear')
		'_OUTPUT_DIR_.ears.shop.ear'
		"""
		# remove chars that are not valid on unix/windows file systems (e.g. colon)
		x = re.sub(r'[^()+./\w-]+','_', name.replace('\\','/').replace('${','_').replace('{','_').replace('}','_').rstrip('/'))
		if len(x) < 256: x = x.replace('/','.') # avoid deeply nested directories in general
		return x

targetNameToUniqueId = BaseTarget.targetNameToUniqueId

from jarpack.pathsets import PathSet
