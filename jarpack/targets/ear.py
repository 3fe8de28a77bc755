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
Contains the `Ear` target for packaging enterprise application archives, and the `ComponentRegistry` that
tracks the components (web applications, EJBs, application clients, resource adapters and shared libraries)
that make up an EAR.

Each component is placed in a directory named after its type (``war/``, ``ejb/``, ``jar/``, ``rar/``, ``lib/``)
unless configured otherwise, and listed in a generated ``META-INF/application.xml``. Shared libraries (``lib``)
are not listed in the descriptor; instead, each time a component built by this build is packaged, its
``Class-Path`` is updated to reference the EAR's shared libraries. For example::

	ear = Ear('${OUTPUT_DIR}/shop.ear', displayName='Shop')
	ear.push(utilJar, springJar)                  # .jar files are shared libraries by default
	ear.add(shopWar, contextRoot='/store')
	ear << {'ejb': ordersJar}
	ear.setPath('lib', 'APP-INF/lib')
"""

import os, posixpath

from jarpack.basetarget import BaseTarget
from jarpack.pathsets import BasePathSet, PathSet
from jarpack.propertysupport import defineOption
from jarpack.targets.java import Jar
from jarpack.utils.flatten import flatten
from jarpack.utils.classpath import reconcileClasspath
from jarpack.utils.descriptor import generateDescriptor, DESCRIPTOR_PATH
from jarpack.utils.buildexceptions import BuildException, UnsupportedComponentType

import logging
log = logging.getLogger('jarpack.ear')

SUPPORTED_TYPES = ('war', 'ejb', 'jar', 'rar', 'lib')
""" The supported component types, in the order used to select the type from a shorthand such as ``add(ejb=...)``. """

defineOption('Ear.typePaths', {})

def _artifactName(artifact):
	return artifact.name if isinstance(artifact, BaseTarget) else artifact

def inferComponentType(artifact):
	""" Returns the component type for an artifact that was added without an explicit type.

	Targets built by jarpack declare their type; otherwise it is the file extension. A plain ``jar`` is a
	shared library.

	>>> inferComponentType('lib/commons-lang.jar')
	'lib'
	>>> inferComponentType('${OUTPUT_DIR}/shop.WAR')
	'war'
	>>> inferComponentType('connectors/mq.rar')
	'rar'
	"""
	type = getattr(artifact, 'artifactType', None)
	if not type:
		type = os.path.splitext(_artifactName(artifact).rstrip('/'))[1].lstrip('.').lower()
	if type == 'jar': type = 'lib'
	return type

class EarComponent(object):
	""" A member of an EAR.

	:ivar artifact: the target or path (string) of the file to be packaged.
	:ivar str type: the component type, one of `SUPPORTED_TYPES`.
	:ivar contextRoot: for ``war`` components, the web context root, or None to use the id, or False to omit it.
	:ivar str file: the absolute path of the artifact, once resolved during the build.
	"""
	def __init__(self, registry, artifact, type, path=None, id=None, contextRoot=None):
		self.artifact = artifact
		self.type = type
		self.contextRoot = contextRoot
		self.file = None
		self.__registry = registry
		self.__path = path
		self.__id = id
		# capture the build file location, to resolve relative paths
		self.__pathSet = PathSet(artifact)

	@property
	def path(self):
		""" The directory within the EAR where this component is placed; an empty string for the root. """
		if self.__path is not None: return self.__path
		return self.__registry.getPath(self.type)

	@property
	def id(self):
		""" The module id: explicitly specified, or declared by the artifact's target, or the file name without
		its extension. """
		if self.__id: return self.__id
		if getattr(self.artifact, 'artifactId', None): return self.artifact.artifactId
		return os.path.splitext(self.basename)[0]

	@property
	def basename(self):
		return os.path.basename((self.file or _artifactName(self.artifact)).replace('\\', '/').rstrip('/'))

	@property
	def uri(self):
		return self.__registry.getUri(self)

	def getPathSet(self):
		return self.__pathSet

	def resolve(self, context):
		""" Resolve the absolute path of the artifact for this build. """
		if self.file is None:
			paths = self.__pathSet.resolve(context)
			if len(paths) != 1: raise BuildException('EAR component must be a single file: %s'%self.__pathSet)
			self.file = paths[0]
		return self.file

	def __repr__(self):
		return '%s:%s%s%s%s'%(self.type, str(_artifactName(self.artifact)).replace('\\', '/'),
			'' if self.__path is None else ' path=%s'%self.__path,
			'' if not self.__id else ' id=%s'%self.__id,
			'' if self.contextRoot is None else ' contextRoot=%s'%self.contextRoot)

class ComponentRegistry(object):
	""" Tracks the components of an EAR, assigning each a type and install path.

	>>> r = ComponentRegistry()
	>>> r.push('lib/commons-lang.jar', {'ejb': 'beans/orders.jar'}, ['web/shop.war'])
	>>> [(c.type, c.id, c.uri) for c in r.all()]
	[('lib', 'commons-lang', 'lib/commons-lang.jar'), ('ejb', 'orders', 'ejb/orders.jar'), ('war', 'shop', 'war/shop.war')]
	>>> r.setPath('lib', 'APP-INF/lib/')
	>>> r.libsClasspath()
	['APP-INF/lib/commons-lang.jar']
	>>> r.setPath('war', '')
	>>> r.getUri(r.all()[2])
	'shop.war'
	>>> r.add('clients/admin.jar', type='jar', path='/clients').uri
	'clients/admin.jar'
	>>> r.add('x/util.jar', path='./shared/../lib').uri
	'lib/util.jar'
	>>> r.add('web/shop.aar')
	Traceback (most recent call last):
	...
	jarpack.utils.buildexceptions.UnsupportedComponentType: Unsupported EAR component type "aar" for web/shop.aar (supported types are: war, ejb, jar, rar, lib)
	"""

	def __init__(self, beforeResolve=None):
		"""
		@param beforeResolve: None, or a function called with the registry and the context before component paths
			are resolved during the build (e.g. to apply default paths from target options).
		"""
		self.__components = []
		self.__paths = {}
		self.__defaultPaths = {}
		self.__beforeResolve = beforeResolve

	def add(self, artifact=None, type=None, path=None, id=None, contextRoot=None, **typeShorthand):
		""" Add a component.

		@param artifact: the target or file path of the component.

		@param type: the component type, one of `SUPPORTED_TYPES`. If not specified the type is inferred from
			the artifact (see `inferComponentType`).

		@param path: the directory within the EAR; by default this is `getPath` for the component's type.

		@param id: the module id; by default the artifact's id or file name without extension.

		@param contextRoot: for ``war`` components, the web context root (default is the id), or False to omit it.

		@param typeShorthand: as an alternative to specifying the artifact and type, use the type as the
			keyword, e.g. ``add(ejb='beans/orders.jar')``.

		@return: the new `EarComponent`.
		"""
		for t in SUPPORTED_TYPES:
			if t in typeShorthand:
				if artifact is not None: raise BuildException('Cannot specify an EAR component artifact both positionally and as "%s"'%t)
				artifact = typeShorthand.pop(t)
				type = type or t
				break
		if typeShorthand:
			raise UnsupportedComponentType('Unsupported EAR component type "%s" (supported types are: %s)'%(
				'", "'.join(sorted(typeShorthand)), ', '.join(SUPPORTED_TYPES)))
		if artifact is None: raise BuildException('No artifact was specified for the EAR component')

		if not type: type = inferComponentType(artifact)
		if type not in SUPPORTED_TYPES:
			raise UnsupportedComponentType('Unsupported EAR component type "%s" for %s (supported types are: %s)'%(
				type, _artifactName(artifact), ', '.join(SUPPORTED_TYPES)))

		component = EarComponent(self, artifact, type, path=path, id=id, contextRoot=contextRoot)
		self.__components.append(component)

		if type != 'lib' and isinstance(artifact, BaseTarget):
			# once the component's own archive is built, reference our shared libraries from its manifest
			artifact.addCompletionListener(lambda target, context: self.reconcile(component, target, context))
			# and make sure it is rebuilt (so reconciled again) if the set of libraries changes
			artifact.registerImplicitInput(lambda context: 'EAR shared libraries: %s'%' '.join(self.libsClasspath(context)))
		return component

	def push(self, *artifacts):
		""" Add any number of components, each specified by an artifact (target or path), or a dict of `add` keyword
		arguments such as ``{'war': shopWar, 'contextRoot': '/store'}``. Nested lists are flattened.
		"""
		for a in flatten(artifacts):
			if isinstance(a, dict):
				self.add(**a)
			else:
				self.add(a)

	def all(self):
		""" Returns the list of components, in the order they were added. """
		return list(self.__components)

	def setPath(self, type, path):
		""" Set the directory within the EAR for components of the specified type.

		An empty string or None places components at the root of the EAR.
		"""
		if type not in SUPPORTED_TYPES:
			raise UnsupportedComponentType('Unsupported EAR component type "%s" (supported types are: %s)'%(type, ', '.join(SUPPORTED_TYPES)))
		self.__paths[type] = path or ''

	def setDefaultPaths(self, paths):
		""" Set the directories used for types that have not been configured with `setPath`. """
		self.__defaultPaths = {t: (p or '') for (t, p) in (paths or {}).items()}

	def getPath(self, type):
		""" Returns the directory within the EAR for components of the specified type, which is the value
		set by `setPath`, else the default paths, else the type name.
		"""
		if type in self.__paths: return self.__paths[type]
		if type in self.__defaultPaths: return self.__defaultPaths[type]
		return type

	def getUri(self, component):
		""" Returns the ``/``-separated location of the component within the EAR, with ``.`` and ``..`` collapsed
		and no leading separator. """
		return posixpath.normpath('/'+posixpath.join((component.path or '').replace('\\', '/'), component.basename)).lstrip('/')

	def resolve(self, context):
		""" Resolve the files of all components for this build. """
		if self.__beforeResolve: self.__beforeResolve(self, context)
		for c in self.__components:
			c.resolve(context)
		return self.all()

	def libsClasspath(self, context=None):
		""" Returns the EAR-relative URIs of the shared libraries, in the order they were added.

		@param context: if specified, the components are resolved using this context first.
		"""
		if context is not None: self.resolve(context)
		return [c.uri for c in self.__components if c.type == 'lib']

	def reconcile(self, component, target, context):
		""" Update the ``Class-Path`` of a built component so it references all the shared libraries.

		Called automatically after each component target in this build has been built.
		"""
		self.resolve(context)
		return reconcileClasspath(component.file, self.libsClasspath(), createdBy=target.getOption('jar.manifest.createdBy'))

	def __repr__(self):
		return 'EarComponents(%s%s)'%(', '.join(repr(c) for c in self.__components),
			''.join(', %s=%s'%(t, self.__paths[t]) for t in sorted(self.__paths)))

class _EarContents(BasePathSet):
	""" The files of the components of an EAR, each with its URI as the destination. """
	def __init__(self, registry):
		self.registry = registry

	def __repr__(self):
		return repr(self.registry)

	def _resolveUnderlyingDependencies(self, context):
		for c in self.registry.all():
			yield from c.getPathSet()._resolveUnderlyingDependencies(context)

	def resolveWithDestinations(self, context):
		return [(c.file, c.uri) for c in self.registry.resolve(context)]

class Ear(Jar):
	""" Create a ``.ear`` enterprise application archive containing the specified components and a generated
	``META-INF/application.xml`` deployment descriptor.

	The following options can be set in addition to those listed on `jarpack.targets.java.Jar`:

		- ``Ear.typePaths = {}`` A dict of component type to directory, for types that have not been configured
		  with `setPath`.
	"""

	artifactType = 'ear'

	def __init__(self, ear, displayName=None, manifest={}, metaInf=None):
		"""
		@param ear: path to the ear to create.

		@param displayName: the application's display name in the deployment descriptor, which may contain
			``${...}`` properties. If not specified, an empty ``display-name`` is written.

		@param manifest: the manifest, see `jarpack.targets.java.Jar`.

		@param metaInf: additional files to include under ``META-INF/``.
		"""
		self.components = ComponentRegistry(beforeResolve=self.__applyOptions)
		self.displayName = displayName
		Jar.__init__(self, ear, _EarContents(self.components), manifest=manifest, metaInf=metaInf)
		self.registerImplicitInputOption('Ear.typePaths')
		self.registerImplicitInput('displayName: %s'%(displayName or ''))

	def __applyOptions(self, registry, context):
		registry.setDefaultPaths(self.getOption('Ear.typePaths', errorIfNone=False))

	def add(self, artifact=None, type=None, path=None, id=None, contextRoot=None, **typeShorthand):
		""" Add a component to this EAR, see `ComponentRegistry.add`.

		@return: the new `EarComponent`.
		"""
		return self.components.add(artifact, type=type, path=path, id=id, contextRoot=contextRoot, **typeShorthand)

	def push(self, *artifacts):
		""" Add components to this EAR, see `ComponentRegistry.push`.

		@return: this target, for fluent use.
		"""
		self.components.push(*artifacts)
		return self

	def __lshift__(self, artifacts):
		""" ``ear << artifact`` is equivalent to ``ear.push(artifact)``. """
		return self.push(artifacts)

	def setPath(self, type, path):
		""" Set the directory within the EAR for components of the specified type, see `ComponentRegistry.setPath`.

		@return: this target, for fluent use.
		"""
		self.components.setPath(type, path)
		return self

	def getPath(self, type):
		return self.components.getPath(type)

	def writeAdditionalEntries(self, archive, context):
		displayName = context.expandPropertyValues(self.displayName) if self.displayName else None
		descriptor = generateDescriptor(self.components.resolve(context), displayName=displayName)
		self.log.debug('Writing %s for %s:\n%s', DESCRIPTOR_PATH, self, descriptor)
		archive.writeBytes(DESCRIPTOR_PATH, descriptor.encode('utf-8'))
