from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		EXCLUDED_MODULES = []

		skipped = 0

		ROOT = os.path.normpath(PROJECT.JARPACK_ROOT)
		DIR = os.path.join(ROOT, 'jarpack')
		allScripts = []
		for dirpath, dirnames, filenames in os.walk(DIR):
			for excl in ['__pycache__']:
				if excl in dirnames: dirnames.remove(excl)

			for f in filenames:
				if f.endswith('.py') and f != '__init__.py':
					with open(dirpath+'/'+f, encoding='utf-8') as pyfile:
						if '>>>' in pyfile.read():
							if getattr(self, 'DOCTEST_FILTER', '') and self.DOCTEST_FILTER.replace('.py','') != f.replace('.py',''): continue

							allScripts.append(dirpath+'/'+f)

		good = bad = 0
		for f in sorted(allScripts):
			moduleName = f.replace(ROOT,'').replace('/','.').replace('\\','.').strip('.')[:-len('.py')]

			if any([re.search(x, moduleName) for x in EXCLUDED_MODULES]):
				self.log.info("skipping excluded module %s"%moduleName)
				skipped += 1
				continue

			environs = self.createEnvirons({'PYTHONPATH':ROOT}, command=sys.executable)
			result = self.startProcess(sys.executable, ['-m', 'doctest', '-v', f],
				environs=environs,
				stdout=moduleName+'.out', stderr=moduleName+'.err', displayName='doctest '+moduleName,
				abortOnError=True, ignoreExitStatus=True)

			if result.exitStatus != 0:
				self.logFileContents(moduleName+'.err', maxLines=0) or self.logFileContents(moduleName+'.out', maxLines=0)
				self.addOutcome(FAILED, 'doctest %s failed'%moduleName, abortOnError=False)
				bad += 1
			else:
				good += 1
		assert good+bad > 0, 'some tests should have run'
		self.log.info('Completed doctesting %d modules; %d failed', good+bad, bad)
		self.log.info("%d modules were skipped" % skipped)

	def validate(self):
		self.addOutcome(PASSED)
