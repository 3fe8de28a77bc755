import json
from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.jarpack()
		self.logFileContents('build-output/reconcile/results.json', maxLines=0)

	def validate(self):
		with open(self.output+'/build-output/reconcile/results.json', encoding='utf-8') as f:
			results = json.load(f)

		# matched by basename against the Class-Path and WEB-INF/lib, first seen wins
		war = results['war']
		self.assertThat('appended == expected', appended=war['appended'], expected=['lib/b.jar'])
		self.assertThat('manifest == expected', manifest=war['manifest'], expected='Manifest-Version: 1.0\nClass-Path: a.jar\n  lib/b.jar\n')
		self.assertThat('entries == expected', entries=war['entries'], expected=['META-INF/MANIFEST.MF', 'index.html', 'WEB-INF/lib/c.jar'])

		again = results['war-again']
		self.assertThat('appended == []', appended=again['appended'])
		self.assertThat('unchanged', unchanged=again['unchanged'])

		self.assertThat('manifest == expected', manifest=results['crlf']['manifest'], expected=
			'Manifest-Version: 1.0\r\nMain-Class: A\r\nClass-Path: lib/a.jar\r\n  lib/b.jar\r\n\r\nName: com/acme/\r\nSealed: true\r\n')

		noManifest = results['no-manifest']
		self.assertThat('manifest == expected', manifest=noManifest['manifest'], expected=
			'Manifest-Version: 1.0\nCreated-By: jarpack-test\nClass-Path: lib/a.jar\n')
		self.assertThat('entries == expected', entries=noManifest['entries'], expected=['A.class', 'META-INF/MANIFEST.MF'])

		long = results['long']['manifest'].split('\n')
		self.assertThat('maxLength < 72', maxLength=max(len(l) for l in long))
		self.assertThat('classpath == expected', classpath=(long[1]+''.join(l[1:] for l in long[2:-1])).split(),
			expected=['Class-Path:', 'lib/'+'x'*80+'.jar', 'lib/short.jar'])

		self.assertThat('appended == expected', appended=results['aar']['appended'], expected=['lib/spring.jar'])

		# the new header is always terminated, otherwise Java ignores it
		self.assertThat('manifest == expected', manifest=results['unterminated']['manifest'], expected=
			'Manifest-Version: 1.0\nMain-Class: A\nClass-Path: lib/b.jar\n')

		# later sections keep their line endings exactly
		self.assertThat('manifest == expected', manifest=results['mixed-sections']['manifest'], expected=
			'Manifest-Version: 1.0\nClass-Path: lib/a.jar\n\nName: com/acme/\rSealed: true\r\n\r\nName: com/acme/util/\nSealed: false\n')
