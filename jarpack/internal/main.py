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
#
# Key concepts:
#   - properties - immutable values specified by build files or overridden on
#       command line. Can be evaluated using "${propertyName}". All properties
#       must be defined in a build file before they can be used.
#   - target - something that generates an output file (e.g. a .jar or .ear)
#       if the output file doesn't exist or is out of date with respect to
#       other targets it depends on; has the ability to clean/delete any
#       generated output.
#   - tag - an alias for a target or set of targets, grouped together to make
#       running them easier from the command line
#

import sys, os, getopt, time, logging, threading

from jarpack.buildcommon import JARPACK_VERSION
from jarpack.buildcontext import BuildInitializationContext, DEFAULT_BUILD_FILE
from jarpack.utils.fileutils import mkdir, deleteDir
from jarpack.utils.buildexceptions import BuildException
from jarpack.utils.consoleformatter import _registeredConsoleFormatters

log = logging.getLogger('jarpack')

_TASK_BUILD = 'build'
_TASK_CLEAN = 'clean'
_TASK_REBUILD = 'rebuild'
_TASK_LIST_TARGETS = 'listTargets'
_TASK_LIST_PROPERTIES = 'listProperties'
_TASK_LIST_OPTIONS = 'listOptions'

def main(args):
	""" Command line argument parser.
	"""
	try:
		usage = [
'',
'jarpack - Java archive packaging %s on Python %s.%s.%s'% (JARPACK_VERSION, sys.version_info[0], sys.version_info[1], sys.version_info[2]),
'',
'python -m jarpack [operation]? [options]* [property=value]* [target|tag]* ',
'',
'Special pseudo-tags:',
'  all                        Include all targets (default if none are provided)',
'',
'Special properties:',
'  OUTPUT_DIR=output          The main directory output will be written to',
'',
'Operations: ',
'  (if none is specified, the default operation is a normal build)',
'      --clean                Clean specified targets incl all deps (default=all)',
'      --rebuild              Clean specified targets incl all deps then build',
'',
'      --targets              List available targets and tags',
'      --properties           List properties that can be set and their ',
'                             defaults in this build file',
'      --options              List the target options available to build rules ',
'                             and their default values in this build file',
'',
'Options:',
'   -k --keep-going           Continue rather than aborting on errors',
'',
'   -f --buildfile <file>     Specify the root build file to import ',
'                             (default is ./%s)'%DEFAULT_BUILD_FILE,
'',
'   -l --log-level LEVEL      Set the log level to debug/info/critical',
'   -L --logfile <file>       Set the log file location',
'   -F --format               Message output format.',
'                             Options:',
] + [
'                                - '+ h for h in _registeredConsoleFormatters
]

		# set up defaults
		properties = {}
		buildOptions = { "keep-going":False, "clean":False, "ignore-deps":False }
		includedTargets = []
		task = _TASK_BUILD
		buildFile = os.path.abspath(DEFAULT_BUILD_FILE)
		logLevel = None
		logFile = None
		format = "default"

		opts,targets = getopt.gnu_getopt(args, "kh?l:L:f:F:",
			["help","keep-going",
			"log-level=","logfile=","buildfile=",
			"targets", "properties", "options", "clean", "rebuild",
			"format="])

		for o, a in opts: # option arguments
			o = o.strip('-')
			if o in ["?", "h", "help"]:
				print('\n'.join(usage))
				return 0
			elif o in ["f", "buildfile"]:
				buildFile = os.path.abspath(a)
			elif o in ['targets']:
				task = _TASK_LIST_TARGETS
			elif o in ['properties']:
				task = _TASK_LIST_PROPERTIES
			elif o in ['options']:
				task = _TASK_LIST_OPTIONS
			elif o in ['l', 'log-level']:
				logLevel = getattr(logging, a.upper(), None)
				if not isinstance(logLevel, int):
					raise getopt.error('invalid log level "%s"'%a)
			elif o in ['L', 'logfile']:
				logFile = a
			elif o in ['F', 'format']:
				format = None
				for h in _registeredConsoleFormatters:
					if h.upper() == a.upper():
						format = h
				if not format:
					print('invalid format "%s"; valid formatters are: %s'%(a, ', '.join(_registeredConsoleFormatters.keys())))
					print('\n'.join(usage))
					return 2
			elif o in ['clean']:
				task = _TASK_CLEAN
				buildOptions['keep-going'] = True
			elif o in ['rebuild']:
				task = _TASK_REBUILD
			elif o in ['k', 'keep-going']:
				buildOptions['keep-going'] = True
			else:
				assert False, "unhandled option: '%s'" % o

		for o in targets: # non-option arguments (i.e. no -- prefix)
			arg = o.strip()
			if arg:
				if '=' in arg:
					properties[arg.split('=', 1)[0].upper()] = arg.split('=', 1)[1]
				else:
					includedTargets.append(arg)

		# default is all
		if not includedTargets:
			includedTargets = ['all']

	except getopt.error as msg:
		print(msg)
		print("For help use --help")
		return 2

	threading.current_thread().name = 'main'
	logging.getLogger().setLevel(logLevel or logging.INFO)

	# initialize logging to stdout - minimal output to avoid clutter, but indicate progress
	hdlr = _registeredConsoleFormatters[format](sys.stdout, buildOptions)
	hdlr.setLevel(logLevel or logging.WARNING)
	logging.getLogger().addHandler(hdlr)
	stdout = sys.stdout

	allTargets = 'all' in includedTargets

	try:
		def loadBuildFile():
			init = BuildInitializationContext(properties)
			isRealBuild = (task in [_TASK_BUILD, _TASK_CLEAN, _TASK_REBUILD])
			init.initializeFromBuildFile(buildFile, isRealBuild=isRealBuild)
			init._finalizeGlobalOptions()
			return init

		init = loadBuildFile()

		# nb: don't import the scheduler until the build file is loaded
		from jarpack.internal.scheduler import BuildScheduler

		def selectTargets(init):
			# expand tags to targets here
			selectedTargets = set() # contains BaseTarget objects
			for t in includedTargets:
				if t == 'all': t = 'full'
				tlist = init.tags().get(t, None)
				if tlist:
					selectedTargets.update(tlist)
				elif t in init.targets():
					selectedTargets.add(init.targets()[t])
				elif t != 'full':
					raise BuildException('Unknown target name or tag name: %s'%t)
			return selectedTargets

		selectedTargets = selectTargets(init)

		if task == _TASK_LIST_PROPERTIES:
			p = init.getProperties()
			print("Properties: ", file=stdout)
			pad = max([0]+list(map(len, p.keys())))
			if pad > 30: pad = 0
			for k in sorted(p.keys()):
				print(('%'+str(pad)+'s = %s') % (k, p[k]), file=stdout)

		elif task == _TASK_LIST_OPTIONS:
			options = init._globalOptions
			pad = max([0]+list(map(len, options.keys())))
			if pad > 30: pad = 0
			for k in sorted(options.keys()):
				print(("%"+str(pad)+"s = %s") % (k, options[k]), file=stdout)

		elif task == _TASK_LIST_TARGETS:
			print("%d target(s) included: "%(len(selectedTargets)), file=stdout)
			for t in sorted(['   %-15s %s'%('<'+t.type+'>', t.name) for t in selectedTargets]):
				print(t, file=stdout)
			print(file=stdout)

			if allTargets:
				print("%d tags(s) are defined: "%(len(init.tags())), file=stdout)
				for t in sorted(['   %-15s (%d targets)'%(t, len(init.tags()[t])) for t in init.tags()]):
					print(t, file=stdout)

		elif task in [_TASK_BUILD, _TASK_CLEAN, _TASK_REBUILD]:
			if not logFile:
				logFile = _maybeCustomizeLogFilename(init.getPropertyValue('LOG_FILE'),
					None if allTargets else 'custom',
					task==_TASK_CLEAN)
			logFile = os.path.abspath(logFile)

			logdir = os.path.dirname(logFile)
			if logdir and not os.path.exists(logdir): mkdir(logdir)
			log.critical('Writing build log to: %s', logFile)

			filehdlr = logging.FileHandler(logFile, mode='w', encoding='UTF-8')
			filehdlr.setFormatter(logging.Formatter('%(asctime)s %(relativeCreated)05d %(levelname)-8s [%(threadName)s %(thread)5d] %(name)-10s - %(message)s', None))
			filehdlr.setLevel(logLevel or logging.INFO)
			logging.getLogger().addHandler(filehdlr)

			log.info('Using jarpack %s from %s on Python %s.%s.%s', JARPACK_VERSION, os.path.normpath(os.path.dirname(os.path.dirname(__file__))), sys.version_info[0], sys.version_info[1], sys.version_info[2])
			log.info('Using build options: %s', buildOptions)

			try:
				DATE_TIME_FORMAT = "%a %Y-%m-%d %H:%M:%S %Z"

				errorsList = []
				if task in [_TASK_CLEAN, _TASK_REBUILD]:
					startTime = time.time()
					log.critical('Starting clean at %s', time.strftime(DATE_TIME_FORMAT, time.localtime( startTime )))

					cleanBuildOptions = buildOptions.copy()
					cleanBuildOptions['clean'] = True
					if allTargets: cleanBuildOptions['ignore-deps'] = True
					scheduler = BuildScheduler(init, selectedTargets, cleanBuildOptions)
					errorsList, targetsBuilt, targetsCompleted, totalTargets = scheduler.run()

					if allTargets: # special-case this common case
						for dir in init.getOutputDirs():
							deleteDir(dir)

					log.critical('Completed clean after %.1f seconds\n', time.time()-startTime)

					if errorsList:
						log.critical('*** JARPACK FAILED: %d error(s): \n   %s', len(errorsList), '\n   '.join(sorted(errorsList)))
						return 4

				if task == _TASK_REBUILD:
					# we must reload the build file here, as it's the only way of flushing out
					# cached data (especially in PathSets) that may have changed as a
					# result of the clean
					init = loadBuildFile()
					selectedTargets = selectTargets(init)

				if task in [_TASK_BUILD, _TASK_REBUILD]:
					buildtype = 'incremental' if any(os.path.exists(dir) for dir in init.getOutputDirs()) else 'full'
					for dir in init.getOutputDirs():
						log.info('Creating output directory: %s', dir)
						mkdir(dir)

					startTime = time.time()
					log.critical('Starting %s build at %s', buildtype, time.strftime(DATE_TIME_FORMAT, time.localtime( startTime )))
					scheduler = BuildScheduler(init, selectedTargets, buildOptions)
					errorsList, targetsBuilt, targetsCompleted, totalTargets = scheduler.run()
					log.critical('Completed %s build after %.1f seconds\n', buildtype, time.time()-startTime)

				if errorsList:
					log.critical('*** JARPACK FAILED: %d error(s) (aborted with %d targets outstanding): \n   %s', len(errorsList), totalTargets-targetsCompleted, '\n   '.join(errorsList))
					return 4
				else:
					# using *** here means we get a valid final progress message
					log.critical('*** JARPACK SUCCEEDED: %s built (%d up-to-date)', targetsBuilt if targetsBuilt else '<NO TARGETS>', (totalTargets-targetsBuilt))
					return 0
			finally:
				logging.getLogger().removeHandler(filehdlr)
				filehdlr.close()
		else:
			raise Exception('Task type not implemented yet - '+task) # should not happen

	except BuildException as e:
		# hopefully we don't end up here very often
		log.error('*** JARPACK FAILED: %s', e.toMultiLineString(None))
		return 5

	except Exception:
		log.exception('*** JARPACK FAILED: ')
		return 6

	finally:
		logging.getLogger().removeHandler(hdlr)

def _maybeCustomizeLogFilename(logFile, tagName, isClean):
	# when using default log file it's a good idea to customize the name if
	# doing a clean or a special build, otherwise calling into jarpack multiple
	# times would overwrite the main log
	logSuffix = ''
	if tagName:
		logSuffix += '-%s'%(tagName.replace(' ','_').replace('\\','.').replace('/','_'))
	if isClean:
		logSuffix += '-clean'
	if logSuffix:
		extPos = logFile.rfind('.')
		if extPos <= 0:
			logFile += logSuffix
		else:
			logFile = logFile[:extPos]+logSuffix+logFile[extPos:]
	return logFile
