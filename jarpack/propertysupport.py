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
Contains functions for use in build files when you need to define and use properties and options.

.. rubric:: Build properties

Properties are named, immutable values that are defined in build files, and can be used
throughout the build using ``${PROP_NAME}`` syntax, for example in manifest header values. Every property must be
explicitly defined in exactly one build file:

.. autosummary::
	defineStringProperty
	definePathProperty
	defineOutputDirProperty
	defineBooleanProperty

Properties can be overridden on the command line using ``PROPNAME=value``. To see a list of the property names and
values for the current build, run::

	python -m jarpack --properties

.. rubric:: Target options

Options customize the behaviour of targets either globally throughout the build (`setGlobalOption`) or for specific
targets (`jarpack.basetarget.BaseTarget.option`). For example the default manifest headers of every Jar are
specified by the ``jar.manifest.defaults`` option. To see the option names and global values, run::

	python -m jarpack --options
"""

import os

from jarpack.buildcontext import BuildInitializationContext
from jarpack.buildcommon import normpath
from jarpack.utils.buildexceptions import BuildException
from jarpack.utils.buildfilelocation import BuildFileLocation

def defineStringProperty(name, default):
	""" Define a string property which can be used in ${...} substitution.

	@param name: The property name

	@param default: The default value of the property (can contain other ${...} variables).
	If set to None, the property must be set on the command line each time
	"""
	init = BuildInitializationContext.getBuildInitializationContext()
	if init: init.defineProperty(name, default, lambda v: BuildInitializationContext.getBuildInitializationContext().expandPropertyValues(v))

def definePathProperty(name, default, mustExist=False):
	""" Define a string property that will be converted to an absolute path.

	The path is normalized and any trailing slashes are removed.

	@param name: The name of the property

	@param default: The default path value of the property (can contain other ${...} variables).
	If a relative path, will be resolved relative to the build file in which it is defined.

	@param mustExist: True if it's an error to specify a path that doesn't exist
	"""
	def _coerceToValidValue(value):
		value = BuildInitializationContext.getBuildInitializationContext().expandPropertyValues(value)

		if not os.path.isabs(value):
			# must absolutize, otherwise the same property could resolve to different paths from different build files
			value = BuildFileLocation(raiseOnError=True).buildDir+'/'+value

		value = normpath(value).rstrip('/\\')
		if mustExist and not os.path.exists(value):
			raise BuildException('Invalid path property value for "%s" - path "%s" does not exist' % (name, value))
		return value

	init = BuildInitializationContext.getBuildInitializationContext()
	if init: init.defineProperty(name, default, coerceToValidValue=_coerceToValidValue)

def defineOutputDirProperty(name, default):
	""" Define a path property that will also be registered as an output directory, meaning it will be created
	automatically at the beginning of the build and deleted during a clean.
	"""
	definePathProperty(name, default)
	init = BuildInitializationContext.getBuildInitializationContext()
	if init: init.registerOutputDir(init.getPropertyValue(name))

def defineBooleanProperty(name, default=False):
	""" Defines a boolean property that will have a True or False value.

	@param name: The property name

	@param default: The default value (default = False)
	"""
	def _coerceToValidValue(value):
		value = BuildInitializationContext.getBuildInitializationContext().expandPropertyValues(str(value))
		if value.lower() == 'true':
			return True
		if value.lower() == 'false' or value=='':
			return False
		raise BuildException('Invalid property value for "%s" - must be true or false' % (name))

	init = BuildInitializationContext.getBuildInitializationContext()
	if init: init.defineProperty(name, default, coerceToValidValue=_coerceToValidValue)

def getPropertyValue(propertyName):
	""" Return the current value of the given property (can only be used during build file parsing).

	For Boolean properties this will be a python Boolean, for everything else it will be a string.
	"""
	context = BuildInitializationContext.getBuildInitializationContext()
	assert context, 'getPropertyValue can only be used during build file initialization phase'
	return context.getPropertyValue(propertyName)

################################################################################
# Options

def defineOption(name, default):
	""" Define an option with a default (can be overridden globally using setGlobalOption() or on individual targets).

	This method is typically used only when implementing a new kind of target.

	@param name: The option name, which should usually be in lowerCamelCase, with
	a prefix specific to this target or group of targets, e.g. ``jar.manifest.defaults``.

	@param default: The default value of the option.
	"""
	BuildInitializationContext._defineOption(name, default)

def setGlobalOption(key, value):
	"""
	Globally override the default for an option
	"""
	init = BuildInitializationContext.getBuildInitializationContext()
	if init:
		init.setGlobalOption(key, value)
