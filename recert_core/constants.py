# recert_core/constants.py

# Fixed SubjectPublicKeyInfo DER overhead (in bits) for an RSA public key
# with exponent 65537; subtracting it from the encoded length gives the modulus size.
RSA_SPKI_DER_OVERHEAD_BITS = 304

PEM_LABEL_RSA_PRIVATE_KEY = "RSA PRIVATE KEY"
PEM_LABEL_EC_PRIVATE_KEY = "EC PRIVATE KEY"
PEM_LABEL_PUBLIC_KEY = "PUBLIC KEY"
PEM_LABEL_CERTIFICATE = "CERTIFICATE"
PEM_LINE_WIDTH = 64

DEFAULT_STORE_PROVIDER = "memory"
DEFAULT_DB_PATH = "db/recert_etcd.db"
DEFAULT_LOG_LEVEL = "INFO"
