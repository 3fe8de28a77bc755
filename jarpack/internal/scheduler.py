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

import sys, os, io, time, traceback

from jarpack.buildcommon import JARPACK_VERSION
from jarpack.buildcontext import BuildContext
from jarpack.utils.buildexceptions import BuildException
from jarpack.utils.fileutils import mkdir, isDirPath
from jarpack.internal.targetwrapper import TargetWrapper

import logging
log = logging.getLogger('scheduler')

class BuildScheduler(object):
	"""
		Master controller that takes a list of targets from the build files
		and a set requested on the command line along with the options and
		builds them, dependencies first, one at a time.
	"""

	def __init__(self, init, targets, options):
		"""
			Create a BuildScheduler.
			init - the BuildInitializationContext
			targets - the selected targets to build this run (list of target objects)
			options - the options for the build (map of string:variable)
		"""
		self.targetwrappers = {} # map of targetPath:TargetWrapper where targetPath is the canonical resolved path
		self.options = options
		self.built = 0
		self.completed = 0 # include built plus any deemed to be up to date

		caseInsensitivePaths = set()
		outputDirs = init.getOutputDirs()

		for t in init.targets().values():
			try:
				# this is also a good place to resolve target names into paths
				t._resolveTargetPath(init)

				if t.path.lower() in caseInsensitivePaths:
					raise BuildException('Duplicate target path "%s"'%(t.path))
				caseInsensitivePaths.add(t.path.lower())

				for o in outputDirs:
					if t.path.rstrip('\\/') == o.rstrip('\\/'):
						raise BuildException('Cannot use shared output directory for target: directory targets must always build to a dedicated directory')

				self.targetwrappers[t.path] = TargetWrapper(target=t, scheduler=self)
			except Exception as e:
				if not isinstance(e, (BuildException, IOError)):
					log.exception('FAILED to prepare target %s: '%t) # include python stack trace in case it's a jarpack bug
				# ensure all exceptions from here are annotated with the location and target name
				raise BuildException('FAILED to prepare target %s'%t, causedBy=True, location=t.location)

		self.context = BuildContext(init)

		self.selected = sorted([self.targetwrappers[t.path] for t in targets]) # ensure a stable order
		self.pending = [] # targetwrappers in the order they will be built (dependencies first)
		self.unresolved = set() # targetwrappers whose dependencies could not be resolved

		width = str(len(str(len(self.targetwrappers))))
		self.progressFormat = '*** %'+width+'d/%'+width+'d '

	def _handle_error(self, target, prefix='Target FAILED'):
		""" Perform logging for the exception on the stack, and return an array of
		string to be appended to the global build errors list.

		target - should be a BaseTarget (not a TargetWrapper)
		prefix - Prefix of exception, describing what we were doing at the time
		"""
		e = sys.exc_info()[1]

		if not isinstance(e, BuildException):
			e = BuildException('%s due to %s'%(prefix, e.__class__.__name__), causedBy=True)

		if log.isEnabledFor(logging.DEBUG): # make sure the stack trace is at least available at debug
			log.debug('Handling error: %s', traceback.format_exc())

		log.error('%s: %s\n', prefix, e.toMultiLineString(target, includeStack=True), extra=e.getLoggerExtraArgDict(target))

		return [e.toSingleLineString(target)]

	def _expand_deps(self):
		"""
			Walk the dependencies of the selected targets depth-first, producing the list of targets to build
			with every target after all of its target dependencies. Raises BuildException on a dependency cycle.
		"""
		errors = []
		visiting = [] # stack of targetwrappers being expanded, for cycle detection
		done = set()

		def visit(targetwrapper):
			if targetwrapper in done: return
			if targetwrapper in visiting:
				cycle = visiting[visiting.index(targetwrapper):]+[targetwrapper]
				log.error('Build FAILED due to %d-target dependency cycle: \n   %s\n', len(cycle)-1, '\n   '.join(t.name for t in cycle))
				raise BuildException('Build failed due to %d-target dependency cycle: %s'%(len(cycle)-1, ' -> '.join(t.name for t in cycle)))
			visiting.append(targetwrapper)
			log.debug("Inspecting dependencies of target %s", targetwrapper)
			try:
				targetwrapper.resolveUnderlyingDependencies()
			except Exception:
				errors.extend(self._handle_error(targetwrapper.target, prefix="Target FAILED during dependency resolution"))
				self.unresolved.add(targetwrapper)
			else:
				for dtargetwrapper in targetwrapper.getTargetDependencies():
					visit(dtargetwrapper)

				if not self.options['clean']:
					missingdep = targetwrapper.findMissingNonTargetDependencies()
					if missingdep is not None:
						missingdep, missingdeperror = missingdep
						ex = BuildException('%s: %s'%(missingdeperror, missingdep))
						log.error('FAILED during dependency resolution: %s', ex.toMultiLineString(targetwrapper, includeStack=False), extra=ex.getLoggerExtraArgDict(targetwrapper))
						errors.append(ex.toSingleLineString(targetwrapper))
						self.unresolved.add(targetwrapper)
			visiting.pop()
			done.add(targetwrapper)
			if targetwrapper not in self.unresolved:
				self.pending.append(targetwrapper)

		for targetwrapper in self.selected:
			visit(targetwrapper)

		if not errors:
			targetinfodir = mkdir(self.context.expandPropertyValues('${BUILD_WORK_DIR}/targets/'))
			with io.open(targetinfodir+'/jarpack-version.properties', 'w', encoding='utf-8') as f:
				f.write('jarpackVersion=%s\n'%JARPACK_VERSION)
			with io.open(targetinfodir+'/selected-targets.txt', 'w', encoding='utf-8') as f:
				f.write('%d targets selected for building:\n'%(len(self.pending)))
				for targetwrapper in self.pending:
					deps = targetwrapper.getTargetDependencies() or []
					f.write('- Target %s depends on: %s\n\n'%(targetwrapper,
						', '.join(str(d) for d in deps) if deps else '<no dependencies>'))
		return errors

	def _run_target(self, target):
		"""
			Run a single target, calling clean or run appropriately and counting the time taken.
			target - the TargetWrapper holding the target to build
			Returns a list of error(s) encountered during the build
		"""
		errors = []

		log.info("%s: executing", target.name)
		starttime = time.time()
		if self.options["clean"]:
			try:
				target.clean(self.context)
			except Exception:
				errors.extend(self._handle_error(target.target, prefix='Target clean FAILED'))
		else:
			# must always clean before running, in case there's some incorrect junk around
			# in output dir or work dir from a previous execution
			try:
				log.debug('%s: Performing pre-execution clean', target.name)
				target.internal_clean(self.context) # removes the target and work dir, but doesn't call target-specific clean
			except Exception:
				errors.extend(self._handle_error(target.target, prefix='Target pre-execution clean FAILED'))

			try:
				if not errors:
					log.debug('%s: executing run method for target', target.name)
					target.run(self.context)
			except Exception:
				errors.extend(self._handle_error(target.target))

				# if it failed we MUST delete the stamp file so it rebuilds next time, but
				# don't nuke the work dir which may help to track down the error
				try:
					target.deleteStampFile()
				except Exception:
					errors.extend(self._handle_error(target.target, prefix='ERROR deleting target stampfile after target failure'))

		log.critical("    %s: done in %.1f seconds", target.name, time.time() - starttime)
		return errors

	def _build(self):
		"""
			Runs the build, processing each target after its dependencies.
			On error either keeps going (skipping targets that depend on a failed target) or
			returns immediately.
		"""
		errors = []
		failed = set(self.unresolved)
		total = len(self.pending)
		for index, target in enumerate(self.pending, 1):
			if not self.options["clean"] and any(d in failed for d in target.getTargetDependencies()):
				log.warning('Not building %s because a dependency failed', target)
				failed.add(target)
				continue

			targetErrors = []
			try:
				if self.options["clean"] or not target.uptodate(self.context):
					log.critical(self.progressFormat+("Cleaning %s" if self.options["clean"] else "Building %s"), index, total, target)
					targetErrors = self._run_target(target)
					# make sure we rebuild rdeps
					for rd in target.rdeps():
						if not rd.dirty():
							log.info("Up-to-date check: %s must be rebuilt due to change in dependency %s", rd.name, target)
					if not targetErrors: self.built += 1
				else:
					log.critical(self.progressFormat+"Target is already up-to-date: %s", index, total, target)
			except Exception:
				targetErrors = self._handle_error(target.target, prefix="Target FAILED")

			if targetErrors:
				errors.extend(targetErrors)
				failed.add(target)
				if not self.options["keep-going"]: break
			else:
				self.completed += 1
		return errors

	def run(self):
		"""
			Run the build taking the set of requested targets,
			expanding it for dependencies and running each in order.

			Returns a tuple (errors, built, completed, total).
		"""
		builderrors = []
		if self.options['clean'] and self.options.get('ignore-deps'):
			# when cleaning everything there's no need to expand dependencies
			self.pending = list(self.selected)
			deperrors = []
		else:
			log.critical('Starting dependency resolution phase')
			deperrors = self._expand_deps()

		if not deperrors or self.options["keep-going"]:
			log.critical('Starting %s execution phase', 'clean' if self.options['clean'] else 'build')
			builderrors = self._build()

		return deperrors+builderrors, self.built, self.completed, len(self.pending)
