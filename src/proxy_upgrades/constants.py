"""Configuration constants for proxy-upgrades library."""

# Environment variables and their defaults
OUT_DIR_ENV = "FOUNDRY_OUT"
DEFAULT_OUT_DIR = "out"

BASH_PATH_ENV = "OPENZEPPELIN_BASH_PATH"
DEFAULT_BASH_PATH = "bash"

RPC_URL_ENV = "ETH_RPC_URL"

LOG_LEVEL_ENV = "PROXY_UPGRADES_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

# File layout of the compiler output directory
SOURCE_SUFFIX = ".sol"
ARTIFACT_SUFFIX = ".json"
BUILD_INFO_DIR = "build-info"

# External command-line tools
UPGRADES_CORE_PACKAGE = "@openzeppelin/upgrades-core@^1.32.3"
DEPLOY_CLIENT_PACKAGE = "@openzeppelin/defender-deploy-client-cli@0.0.1-alpha.7"

# EIP-1967 storage slots
IMPLEMENTATION_SLOT = "0x360894a13ba1a3210667c828492db98dca3e2076cc3735a920a3ca505d382bbc"
ADMIN_SLOT = "0xb53127684a568b3173ae13b9f8a6016e243e63b6e8ee1178d6a717850b5d6103"
BEACON_SLOT = "0xa3f0ad74e5423aebfd80d3ef4346578335a9a72aeaee59ff6cb3582b35133d50"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

RPC_TIMEOUT = 30

# NatSpec tag naming the contract an implementation upgrades from
UPGRADES_FROM_TAG = "@custom:oz-upgrades-from"

# SPDX identifier -> license type accepted by the external deployer
SPDX_TO_LICENSE_TYPE = {
    "UNLICENSED": "None",
    "Unlicense": "Unlicense",
    "MIT": "MIT",
    "GPL-2.0-only": "GNU GPLv2",
    "GPL-2.0-or-later": "GNU GPLv2",
    "GPL-3.0-only": "GNU GPLv3",
    "GPL-3.0-or-later": "GNU GPLv3",
    "LGPL-2.1-only": "GNU LGPLv2.1",
    "LGPL-2.1-or-later": "GNU LGPLv2.1",
    "LGPL-3.0-only": "GNU LGPLv3",
    "LGPL-3.0-or-later": "GNU LGPLv3",
    "BSD-2-Clause": "BSD-2-Clause",
    "BSD-3-Clause": "BSD-3-Clause",
    "MPL-2.0": "MPL-2.0",
    "OSL-3.0": "OSL-3.0",
    "Apache-2.0": "Apache-2.0",
    "AGPL-3.0-only": "GNU AGPLv3",
    "AGPL-3.0-or-later": "GNU AGPLv3",
    "BUSL-1.1": "BSL 1.1",
}
