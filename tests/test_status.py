from metricvault.status import ApplicationId, Status


def test_status_ordering_goes_from_unknown_to_critical():
    ordered = [Status(s.value) for s in
               (Status.UNKNOWN, Status.OK, Status.INFO, Status.WARNING, Status.CRITICAL)]
    assert sorted(ordered, reverse=True) == list(reversed(ordered))
    assert max(Status(Status.OK.value), Status(Status.WARNING.value),
               Status(Status.INFO.value)) is Status.WARNING


def test_unknown_is_the_lowest_status():
    assert min(Status(s.value) for s in Status) is Status.UNKNOWN


def test_empty_application_id_is_zero():
    assert ApplicationId().is_zero()


def test_application_id_with_any_part_is_not_zero():
    assert not ApplicationId(name="api").is_zero()
    assert not ApplicationId(namespace="prod").is_zero()
    assert not ApplicationId(kind="Deployment").is_zero()


def test_application_ids_with_same_parts_are_equal_and_hash_alike():
    a = ApplicationId("prod", "Deployment", "api")
    b = ApplicationId("prod", "Deployment", "api")
    assert a == b
    assert len({a, b}) == 1


def test_application_id_string_contains_parts():
    text = str(ApplicationId("prod", "Deployment", "api"))
    assert text.split(":") == ["prod", "Deployment", "api"]