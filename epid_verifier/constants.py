"""
Protocol constants shared by the EPID verifier adapter.

Integer keys follow the FDO / COSE / EAT registries. Path segments are
joined into the verifier endpoint by ``verifier.resolve_endpoint``.
"""

from __future__ import annotations

# =========================================================================
# COSE_Sign1 array positions
# =========================================================================

COSE_SIGN1_UNPROTECTED = 1
COSE_SIGN1_PAYLOAD = 2
COSE_SIGN1_SIGNATURE = 3

# CBOR tag for COSE_Sign1 (RFC 9052).
COSE_SIGN1_TAG = 18

# =========================================================================
# EAT claim keys
# =========================================================================

EAT_NONCE = 10

# Unprotected-header key carrying the vendor (Maroe) prefix.
EAT_MAROE_PREFIX = -17760

# =========================================================================
# SigInfo array positions
# =========================================================================

SIG_INFO_TYPE = 0
SIG_INFO_GROUP_ID = 1

# =========================================================================
# Verifier endpoint
# =========================================================================

URL_PATH_SEPARATOR = "/"
EPID_PROTOCOL_VERSION_V1 = "v1"
EPID_11 = "epid11"
EPID_PROOF_URI_PATH = "proof"

DEFAULT_EPID_ONLINE_URL = "https://verify.epid-sbx.trustedservices.intel.com/"
