from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.writefile import *
from jarpack.targets.java import *

defineOutputDirProperty('OUTPUT_DIR', None)

WriteFile('${OUTPUT_DIR}/Hello.txt', 'Hello')

Jar('${OUTPUT_DIR}/hello.jar', ['${OUTPUT_DIR}/Hello.txt'], manifest={'Implementation-Title':'Hello'})
