from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.archive import *
from jarpack.targets.java import *
from jarpack.utils.manifest import ManifestFile

defineOutputDirProperty('OUTPUT_DIR', None)

Jar('${OUTPUT_DIR}/sections.jar', [], manifest=[
	{'Sealed':'true', 'Name':'com/acme/'},
	{'Name':'org/x/', 'B':'2', 'A':'1'},
	])

Jar('${OUTPUT_DIR}/text.jar', [], manifest='Main-Class: a.B\r\nX-Long: '+'y'*100)

Jar('${OUTPUT_DIR}/file.jar', [], manifest=ManifestFile('manifest.txt'))

def getManifest():
	return {'Built-From':'function'}

Jar('${OUTPUT_DIR}/function.jar', [], manifest=getManifest)

Jar('${OUTPUT_DIR}/none.jar', ['manifest.txt'], manifest=None)

Zip('${OUTPUT_DIR}/plain.zip', ['manifest.txt'], metaInf=['manifest.txt'])
