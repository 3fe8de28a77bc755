from jarpack.propertysupport import *
from jarpack.pathsets import *

from jarpack.targets.java import *

defineOutputDirProperty('OUTPUT_DIR', None)

Jar('${OUTPUT_DIR}/ok.jar', [], manifest={'Main-Class':'a.B'})

Jar('${OUTPUT_DIR}/bad.jar', [], manifest=42)
