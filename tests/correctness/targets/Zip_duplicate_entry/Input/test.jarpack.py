from jarpack.propertysupport import *
from jarpack.pathsets import *

from jarpack.targets.archive import *
from jarpack.targets.writefile import *

defineOutputDirProperty('OUTPUT_DIR', None)

WriteFile('${OUTPUT_DIR}/a/readme.txt', 'A')
WriteFile('${OUTPUT_DIR}/b/readme.txt', 'B')

Zip('${OUTPUT_DIR}/duplicate.zip', ['${OUTPUT_DIR}/a/readme.txt', '${OUTPUT_DIR}/b/readme.txt'])

Zip('${OUTPUT_DIR}/ok.zip', ['${OUTPUT_DIR}/a/readme.txt', AddDestPrefix('b/', '${OUTPUT_DIR}/b/readme.txt')])
