from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):
	def execute(self):
		self.jarpack(stdouterr='mytest', args=[])

	def validate(self):
		self.assertGrep('mytest.out', expr=r"XXX") # if no extra verifications are needed, instead use: self.addOutcome(PASSED)
