from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.java import *
from jarpack.targets.ear import *
from jarpack.targets.writefile import *

defineOutputDirProperty('OUTPUT_DIR', None)
defineStringProperty('APP_VERSION', '1.0')

WriteFile('${OUTPUT_DIR}/version.txt', '${APP_VERSION}').tags('web')
War('${OUTPUT_DIR}/shop.war', package=['${OUTPUT_DIR}/version.txt']).tags('web', 'dist')
Jar('${OUTPUT_DIR}/tools.jar', []).tags('tools')
