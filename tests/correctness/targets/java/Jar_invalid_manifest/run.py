from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.msg = self.jarpack(shouldFail=True)

	def validate(self):
		self.assertThat('"Invalid manifest, expecting dict, list of dicts, text, manifest file or function but got: 42" in msg', msg=self.msg)
		self.assertGrep('jarpack.out', expr='Failed to load build file: .*test.jarpack.py:10 : Invalid manifest')
		self.assertGrep('jarpack.out', expr='Traceback', contains=False)
		self.assertPathExists('build-output/ok.jar', exists=False)
