from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.jarpack()
		for jar in ['sections', 'text', 'file', 'function']:
			self.extractArchiveEntry('build-output/%s.jar'%jar, 'META-INF/MANIFEST.MF', dest=jar+'.MF')

	def validate(self):
		def readLines(name):
			with open(self.output+'/'+name, 'rb') as f:
				return f.read().decode('utf-8').split('\n')[2:-1] # skip standard header lines

		self.assertThat('sections == expected', sections=readLines('sections.MF'), expected=[
			'Name: com/acme/',
			'Sealed: true',
			'',
			'Name: org/x/',
			'A: 1',
			'B: 2',
			'',
			])

		self.assertThat('text == expected', text=readLines('text.MF'), expected=[
			'Main-Class: a.B',
			'X-Long: '+'y'*63,
			' '+'y'*37,
			])

		self.assertThat('file == expected', file=readLines('file.MF'), expected=[
			'Main-Class: com.acme.FromFile',
			'X-From-File: true',
			])

		self.assertThat('function == expected', function=readLines('function.MF'), expected=[
			'Built-From: function',
			])

		self.assertThat('entries == expected', entries=self.listArchive('build-output/none.jar'), expected=['manifest.txt'])
		self.assertThat('entries == expected', entries=self.listArchive('build-output/plain.zip'), expected=['manifest.txt', 'META-INF/manifest.txt'])
