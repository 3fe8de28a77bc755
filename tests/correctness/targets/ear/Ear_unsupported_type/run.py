from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.msg = self.jarpack(shouldFail=True)
		self.msg2 = self.jarpack(shouldFail=True, stdouterr='jarpack-shorthand', buildfile='shorthand.jarpack.py')

	def validate(self):
		self.assertThat('msg.endswith(expected)', msg=self.msg,
			expected='Unsupported EAR component type "aar" for ${OUTPUT_DIR}/service.aar (supported types are: war, ejb, jar, rar, lib)')
		self.assertGrep('jarpack.out', expr='Failed to load build file: .*test.jarpack.py:13 : Unsupported EAR component type')

		self.assertThat('msg2.endswith(expected)', msg2=self.msg2,
			expected='Unsupported EAR component type "sar" (supported types are: war, ejb, jar, rar, lib)')
