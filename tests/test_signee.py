import pytest
from cryptography import x509
from cryptography.x509.oid import NameOID

from recert_core.cn_san_replace import CnSanReplaceRules
from recert_core.errors import SigneeError
from recert_core.keys import PrivateKey, PublicKey, SigningKeyPair
from recert_core.pem_utils import decode_single_pem
from recert_core.signee import CertificateSignee


def test_regenerate_resigns_with_new_key(ca_key, pool, issue_cert):
    signee = CertificateSignee(issue_cert("etcd-serving", ca_key, dns_names=["etcd.local"]))
    old_pub = PrivateKey.from_rsa(ca_key).public_key()
    new_key, pair = pool.get(2048)

    signee.regenerate(old_pub, pair, pool, CnSanReplaceRules())

    new_pub = PublicKey.from_crypto(new_key.public_key())
    assert signee.regenerated
    assert signee.signed_by(new_pub)
    assert not signee.signed_by(old_pub)
    assert signee.signer_fingerprint(new_pub) == new_pub.fingerprint()

    aki = signee.certificate.extensions.get_extension_for_class(x509.AuthorityKeyIdentifier).value
    assert aki == x509.AuthorityKeyIdentifier.from_issuer_public_key(new_key.public_key())


def test_regenerate_applies_cn_san_rules(ca_key, pool, issue_cert):
    cert = issue_cert("api.old.example", ca_key, dns_names=["api.old.example", "localhost"])
    signee = CertificateSignee(cert)
    rules = CnSanReplaceRules.from_strings(["api.old.example:api.new.example"])
    _, pair = pool.get(2048)

    signee.regenerate(PrivateKey.from_rsa(ca_key).public_key(), pair, pool, rules)

    new_cert = signee.certificate
    assert new_cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)[0].value == "api.new.example"
    san = new_cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    assert san.get_values_for_type(x509.DNSName) == ["api.new.example", "localhost"]
    assert new_cert.serial_number == cert.serial_number
    assert new_cert.public_key() == cert.public_key()


def test_regenerate_refuses_wrong_signer(ca_key, rsa_keys_2048, pool, issue_cert):
    signee = CertificateSignee(issue_cert("x", ca_key))
    stranger = PublicKey.from_crypto(rsa_keys_2048[3].public_key())

    with pytest.raises(SigneeError):
        signee.regenerate(stranger, SigningKeyPair(rsa_keys_2048[2]), pool, CnSanReplaceRules())
    assert not signee.regenerated


def test_pem_is_certificate_block(ca_key, issue_cert):
    cert = issue_cert("leaf", ca_key)
    block = decode_single_pem(CertificateSignee(cert).pem())

    assert block.label == "CERTIFICATE"
    assert x509.load_der_x509_certificate(block.der) == cert
