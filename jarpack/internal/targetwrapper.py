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

import os, io

from jarpack.basetarget import BaseTarget
from jarpack.utils.fileutils import deleteFile, mkdir, openForWrite, getmtime, isDirPath

import logging
log = logging.getLogger('scheduler.targetwrapper')
uptodatelog = logging.getLogger('uptodate')

class TargetWrapper(object):
	"""
		Internal wrapper for a target which contains all the state needed by the
		scheduler during builds.
	"""

	def __init__(self, target, scheduler):
		self.target = target
		self.path = target.path
		self.name = target.name
		self.isDirPath = isDirPath(target.name)

		self.__scheduler = scheduler

		self.__rdeps = []
		"""A list of TargetWrappers that depend on this one"""

		self.__isdirty = False

		self.__implicitInputs = None

		self.__targetdeps = None
		""" A list of TargetWrappers that this one depends upon.
		Can only be used after resolveUnderlyingDependencies has been called. """

		self.__nontargetdeps = None
		""" A sorted list of absolute paths of dependencies that aren't targets. """

		self.__implicitInputsFile = self.__getImplicitInputsFile()
		if self.isDirPath:
			self.stampfile = self.__implicitInputsFile # might as well re-use this for dirs
		else:
			self.stampfile = self.target.path

	def __hash__ (self): return hash(self.target) # delegate
	def __lt__(self, other): return self.target.path < other.target.path

	def __str__(self): return '%s'%self.target # display string for the underlying target
	def __repr__(self): return 'TargetWrapper.%s'%str(self)

	def __getattr__(self, name):
		# sometimes a TargetWrapper is passed to BuildException which calls .location on it
		if name == 'location': return self.target.location
		raise AttributeError('Unknown attribute %s' % name)

	def __getImplicitInputsFile(self):
		x = self.target.workDir.replace('\\','/').split('/')
		# relies on basetarget._resolveTargetPath having been called
		return '/'.join(x[:-1])+'/implicit-inputs/'+x[-1]+'.txt' # since workDir is already unique (but don't contaminate work dir by putting this inside it)

	def __getImplicitInputs(self, context):
		# this is called in either uptodate or run, never during dependency resolution
		# since we don't have all our inputs yet at that point
		if self.__implicitInputs is not None: return self.__implicitInputs

		x = [wrapper.path for wrapper in self.__targetdeps] + list(self.__nontargetdeps)

		# since this is meant to be a list of lines, normalize with a split->join
		# also make any non-linesep \r or \n chars explicit to avoid confusion when diffing
		x += [x.replace('\r','\\r') for x in '\n'.join(self.target.getHashableImplicitInputs(context)).split('\n')]

		self.__implicitInputs = x
		return x

	def getTargetDependencies(self):
		"""
		Get a list of this object's dependencies that are targets, as TargetWrapper objects.

		Do not modify the returned list.
		"""
		self.resolveUnderlyingDependencies() # in case not yet done
		return self.__targetdeps

	def resolveUnderlyingDependencies(self):
		"""
			Calls through to the wrapped target, which does the expansion/replacement
			of dependency strings here.

			Populates the list of target deps and non target deps. Idempotent.
		"""
		if self.__nontargetdeps is not None: return

		scheduler = self.__scheduler
		context = scheduler.context

		targetdeps = {} # path:instance (we use a dict for de-duplication)
		nontargetdeps = set()

		for abspath in self.target._resolveUnderlyingDependencies(context):
			dtargetwrapper = scheduler.targetwrappers.get(abspath)
			if dtargetwrapper is None:
				nontargetdeps.add(abspath)
			elif abspath not in targetdeps and dtargetwrapper is not self:
				targetdeps[abspath] = dtargetwrapper
				dtargetwrapper.__rdeps.append(self)

		# sort for deterministic order
		self.__nontargetdeps, self.__targetdeps = sorted(nontargetdeps), sorted(targetdeps.values(), key=lambda wrapper: wrapper.name)

	def findMissingNonTargetDependencies(self):
		"""
		Iterate over the dependencies that are not targets and check
		the files and dirs exist, and for directories, have the correct
		trailing slash. Returns a tuple (path, reason) for the first one that's missing, or None.
		"""
		for dpath in self.__nontargetdeps:
			if not os.path.exists(dpath):
				return dpath, 'Missing dependency'
			if isDirPath(dpath) != os.path.isdir(dpath):
				return dpath, 'Trailing slash is required for directories'
		return None

	def dirty(self):
		"""
			Marks the object as explicitly dirty to avoid doing uptodate checks.

			Returns the previous value, i.e. True if this was a no-op.
		"""
		r = self.__isdirty
		self.__isdirty = True
		return r

	def rdeps(self):
		"""
			Returns the list of reverse target dependencies as TargetWrapper objects.
		"""
		return self.__rdeps

	def uptodate(self, context):
		"""
			Checks whether the target needs to be rebuilt.
			Returns true if the target is up to date and does not need a rebuild.

			Must not be called until all target dependencies have been built.
		"""
		log.debug('Up-to-date check for %s', self.name)

		if self.__isdirty:
			log.debug('Up-to-date check: %s has been marked dirty', self.name)
			return False

		if not os.path.exists(self.path):
			log.debug('Up-to-date check: %s must be built because file does not exist: "%s"', self.name, self.path)
			self.__isdirty = True
			return False

		implicitInputs = self.__getImplicitInputs(context)

		if implicitInputs or self.isDirPath:
			if not os.path.isfile(self.__implicitInputsFile):
				uptodatelog.info('Up-to-date check: %s must be built because implicit inputs/stamp file does not exist: "%s"', self.name, self.__implicitInputsFile)
				return False

			with io.open(self.__implicitInputsFile, 'r', encoding='utf-8') as f:
				latestImplicitInputs = f.read().split('\n')
			if latestImplicitInputs != implicitInputs:
				added = ['+ %s'%x for x in implicitInputs if x not in latestImplicitInputs]
				removed = ['- %s'%x for x in latestImplicitInputs if x not in implicitInputs]
				uptodatelog.info('Up-to-date check: %s must be rebuilt because implicit inputs file has changed: "%s"\n\t%s\n', self.name, self.__implicitInputsFile,
					'\n\t'.join(['previous build had %d lines, current build has %d lines'%(len(latestImplicitInputs), len(implicitInputs))]+removed+added))
				return False

		stampmodtime = getmtime(self.stampfile)

		def isNewer(path):
			pathmodtime = getmtime(path)
			if pathmodtime <= stampmodtime: return False
			uptodatelog.info('Up-to-date check: %s must be rebuilt because input file "%s" is newer than "%s" (by %0.1f seconds)', self.name, path, self.stampfile, pathmodtime-stampmodtime)
			return True

		# first check if any target dependencies are newer than output (e.g. from an aborted or partial previous build)
		for dtargetwrapper in self.__targetdeps:
			if isNewer(dtargetwrapper.stampfile): return False

		for dpath in self.__nontargetdeps:
			if not isDirPath(dpath): # ignore directories as timestamp is meaningless
				if isNewer(dpath): return False
		return True

	def run(self, context):
		"""
			Calls the wrapped run method, then notifies the target's completion listeners.
		"""
		implicitInputs = self.__getImplicitInputs(context)
		deleteFile(self.__implicitInputsFile)

		self.target.run(context)
		self.target._notifyCompletionListeners(context)

		# if target built successfully, record what the implicit inputs were to help with the next up to date
		# check and ensure incremental build is correct
		if implicitInputs or self.isDirPath:
			log.debug('writing implicitInputsFile: %s', self.__implicitInputsFile)
			mkdir(os.path.dirname(self.__implicitInputsFile))
			with openForWrite(self.__implicitInputsFile, 'wb') as f:
				f.write('\n'.join(implicitInputs).encode('utf-8'))

	def deleteStampFile(self):
		deleteFile(self.stampfile)
		deleteFile(self.__implicitInputsFile)

	def clean(self, context):
		"""
			Calls the wrapped clean method
		"""
		deleteFile(self.__implicitInputsFile)
		self.target.clean(context)

	def internal_clean(self, context):
		"""
			Calls the BaseTarget clean, not the target-specific clean
		"""
		deleteFile(self.__implicitInputsFile)
		BaseTarget.clean(self.target, context)
