# tests/conftest.py

import datetime
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from recert_core.crypto import rsa_generate
from recert_core.key_pool import RsaKeyPool
from recert_core.keys import PrivateKey


@pytest.fixture(scope="session")
def rsa_keys_2048():
    # Generated once; tests draw copies into their own pools
    return [rsa_generate(2048) for _ in range(4)]


@pytest.fixture
def ca_key(rsa_keys_2048):
    return rsa_keys_2048[0]


@pytest.fixture
def pool(rsa_keys_2048):
    p = RsaKeyPool()
    for key in rsa_keys_2048[1:]:
        p.add(2048, key)
    return p


@pytest.fixture
def ca_private_key(ca_key):
    return PrivateKey.from_rsa(ca_key)


def _name(cn):
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, cn)])


@pytest.fixture
def issue_cert():
    """Build a certificate for a fresh EC subject key, signed by ``signer_key``."""
    def _issue(subject_cn, signer_key, issuer_cn="test-ca", dns_names=None):
        subject_key = ec.generate_private_key(ec.SECP256R1())
        now = datetime.datetime.now(datetime.timezone.utc)
        builder = (
            x509.CertificateBuilder()
            .subject_name(_name(subject_cn))
            .issuer_name(_name(issuer_cn))
            .public_key(subject_key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now - datetime.timedelta(days=1))
            .not_valid_after(now + datetime.timedelta(days=365))
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(signer_key.public_key()),
                critical=False,
            )
        )
        if dns_names:
            builder = builder.add_extension(
                x509.SubjectAlternativeName([x509.DNSName(n) for n in dns_names]),
                critical=False,
            )
        return builder.sign(signer_key, hashes.SHA256())
    return _issue
