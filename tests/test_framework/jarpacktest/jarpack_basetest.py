import os, sys, zipfile

from pysys.constants import *
from pysys.basetest import BaseTest
from pysys.utils.filegrep import filegrep

class JarpackBaseTest(BaseTest):
	def jarpack(self, args=None, buildfile='test.jarpack.py', shouldFail=False, stdouterr='jarpack', env=None, setOutputDir=True, **kwargs):
		"""
		Runs jarpack against the specified buildfile or test.jarpack.py from the
		input dir. Produces output in the <testoutput>/build-output folder.

		@param shouldFail: by default, the test will abort if the build fails.
		Set this to True if the build is expected to fail in which case
		the test will abort if it succeeds, and this method will return a
		string identifying the target or overall failure message if not.

		@returns the failure message string if shouldFail=True, otherwise nothing
		"""
		stdout,stderr=self.allocateUniqueStdOutErr(stdouterr)
		args = args or []
		try:
			try:
				environs = self.createEnvirons(env, command=sys.executable)
				environs['PYTHONPATH'] = os.path.normpath(PROJECT.JARPACK_ROOT)

				newargs = [
					'-m', 'jarpack',
					'-f', os.path.join(self.input, buildfile),
					'--logfile', os.path.join(self.output, stdout.replace('.out', '')+'.log'),
					]
				if setOutputDir: newargs.append('OUTPUT_DIR=%s'%self.output+'/build-output')
				args = newargs+args

				result = self.startProcess(sys.executable, args,
					environs=environs,
					stdout=stdout, stderr=stderr, displayName=('jarpack %s'%' '.join(args)).strip(),
					abortOnError=True, ignoreExitStatus=shouldFail, **kwargs)
				if shouldFail and result.exitStatus != 0: raise Exception('Build failed as expected')
			finally:
				self.logFileContents(stdout, tail=True) or self.logFileContents(stderr, tail=True)

		except AssertionError as e:
			self.log.exception('Assertion error: ')
			raise
		except Exception as e:
			m = None
			try:
				# these give the best messages
				m = filegrep(stdout, '(Target FAILED: .*)', returnMatch=True)
				if not m: m = filegrep(stdout, '(JARPACK FAILED: .*)', returnMatch=True)
				if m: m = m.group(1)
			except Exception as e2:
				if shouldFail: raise e2 # this is fatal if we need the error message
				self.log.exception('Error handling block failed: ')
			if not m: self.log.warning('Caught exception running build: %s', e)
			m = m or '<unknown failure>'

			if shouldFail:
				self.log.info('Build failed as expected; message is: %s', m)
				return m
			else:
				self.abort(BLOCKED, 'Build %s failed unexpectedly: %s'%(stdouterr, m))
		else:
			if shouldFail:
				self.abort(FAILED, 'build %s was expected to fail but succeeded'%stdouterr)

		return None

	def listArchive(self, archive):
		""" Returns the entry names of the specified archive (relative to the output dir), in order. """
		with zipfile.ZipFile(os.path.join(self.output, archive)) as zf:
			return zf.namelist()

	def extractArchiveEntry(self, archive, entry, dest=None):
		""" Writes the specified archive entry to a file in the output dir (so it can be used with assertGrep and
		assertDiff), and returns the file path.

		@param dest: the output-dir-relative file to write; defaults to the archive basename followed by the entry name.
		"""
		dest = os.path.join(self.output, dest or (os.path.basename(archive)+'-'+entry.replace('/', '_')))
		with zipfile.ZipFile(os.path.join(self.output, archive)) as zf:
			data = zf.read(entry)
		with open(dest, 'wb') as f:
			f.write(data)
		return dest

	def getJarpackVersion(self):
		with open(os.path.join(PROJECT.JARPACK_ROOT, 'jarpack', 'JARPACK_VERSION'), encoding='ascii') as f:
			return f.read().strip()
