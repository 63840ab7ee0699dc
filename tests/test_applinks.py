from metricvault.applinks import ApplicationLink, InstanceLink, InstanceView
from metricvault.status import ApplicationId, Status

API = ApplicationId("prod", "Deployment", "api")
DB = ApplicationId("prod", "StatefulSet", "db")


def test_add_client_appends_new_link():
    view = InstanceView(id="web-1")
    view.add_client(API, Status.OK, "to")
    assert view.clients == [ApplicationLink(API, Status.OK, "to")]


def test_add_client_keeps_worst_status():
    view = InstanceView(id="web-1")
    view.add_client(API, Status.WARNING, "to")
    view.add_client(API, Status.OK, "to")
    assert len(view.clients) == 1
    assert view.clients[0].status is Status.WARNING
    view.add_client(API, Status.CRITICAL, "to")
    assert view.clients[0].status is Status.CRITICAL


def test_client_that_is_dependency_becomes_both():
    view = InstanceView(id="web-1")
    view.add_dependency(DB, Status.OK, "to")
    view.add_client(DB, Status.WARNING, "to")
    assert view.clients == []
    assert view.dependencies[0].direction == "both"
    assert view.dependencies[0].status is Status.OK


def test_add_dependency_merges_status():
    view = InstanceView(id="web-1")
    view.add_dependency(DB, Status.INFO, "to")
    view.add_dependency(DB, Status.WARNING, "from")
    assert view.dependencies == [ApplicationLink(DB, Status.WARNING, "to")]


def test_internal_links_are_deduplicated():
    view = InstanceView(id="db-0")
    view.add_internal_link("db-1", Status.OK)
    view.add_internal_link("db-1", Status.WARNING)
    view.add_internal_link("db-2", Status.INFO)
    assert view.internal_links == [
        InstanceLink("db-1", Status.OK, "to"),
        InstanceLink("db-2", Status.INFO, "to"),
    ]