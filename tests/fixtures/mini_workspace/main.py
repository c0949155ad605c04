import util
import helpers, json
from pkg.mod import thing
