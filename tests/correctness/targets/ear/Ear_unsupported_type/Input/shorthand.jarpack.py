from jarpack.propertysupport import *
from jarpack.pathsets import *

from jarpack.targets.ear import *

defineOutputDirProperty('OUTPUT_DIR', None)

ear = Ear('${OUTPUT_DIR}/app.ear')
ear.add(sar='services/legacy.sar')
