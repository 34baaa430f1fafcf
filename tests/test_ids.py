from __future__ import annotations

from cloudterm.ids import (
    FINGERPRINT_PATTERN,
    INSTANCE_ID_PATTERN,
    IdGenerator,
    simulated_address,
)


def test_instance_ids_match_format_and_are_unique() -> None:
    generator = IdGenerator()
    ids = [generator.new_instance_id() for _ in range(500)]

    assert all(INSTANCE_ID_PATTERN.match(item) for item in ids)
    assert len(set(ids)) == len(ids)


def test_seeded_generators_replay_the_same_sequence() -> None:
    first = IdGenerator(seed=42)
    second = IdGenerator(seed=42)

    assert [first.new_instance_id() for _ in range(5)] == [second.new_instance_id() for _ in range(5)]
    assert first.new_fingerprint("web") == second.new_fingerprint("web")


def test_fingerprint_is_sixteen_colon_separated_octets() -> None:
    fingerprint = IdGenerator(seed=1).new_fingerprint("deploy")

    assert FINGERPRINT_PATTERN.match(fingerprint)
    assert len(fingerprint.split(":")) == 16


def test_fingerprints_differ_for_repeated_seed_value() -> None:
    generator = IdGenerator(seed=3)

    assert generator.new_fingerprint("same") != generator.new_fingerprint("same")


def test_public_key_has_type_payload_and_comment() -> None:
    key = IdGenerator(seed=5).new_public_key("alice", hostname="bastion")
    key_type, payload, comment = key.split(" ")

    assert key_type == "ssh-ed25519"
    assert payload.startswith("AAAAC3NzaC1lZDI1NTE5")
    assert comment == "alice@bastion"


def test_simulated_address_is_stable_and_private_by_default() -> None:
    assert simulated_address("db1") == simulated_address("db1")
    assert simulated_address("db1").startswith("10.")
    assert not simulated_address("example.com", private=False).startswith("0.")
