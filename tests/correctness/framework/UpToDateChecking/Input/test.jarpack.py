import os
from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.java import *
from jarpack.targets.ear import *

defineOutputDirProperty('OUTPUT_DIR', None)
defineStringProperty('TITLE', 'title')
defineStringProperty('SRC_DIR', None)

jar = Jar('${OUTPUT_DIR}/test.jar', FindPaths('${SRC_DIR}/classes/'), manifest={'Implementation-Title':'${TITLE}'})

ear = Ear('${OUTPUT_DIR}/test.ear')
ear.push(jar)
