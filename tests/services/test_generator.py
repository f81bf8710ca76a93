from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import httpx
import pytest

from scm_generator.entities import (
    ApplicationSetGenerator,
    ListError,
    MissingConfigError,
    NoProviderConfiguredError,
    ParentResource,
    ProviderInitError,
    SCMProviderGeneratorConfig,
    SecretKeyMissingError,
)
from scm_generator.providers import GithubProvider
from scm_generator.repositories import LocalSecretRepository
from scm_generator.services import DEFAULT_REQUEUE_AFTER, SCMProviderGenerator
from scm_generator.services import provider_selector
from conftest import FakeRepositoryLister, make_generator, make_record, mock_http_client


def fake_generator(lister: FakeRepositoryLister) -> SCMProviderGenerator:
    return SCMProviderGenerator(provider_factory=lambda config, namespace: lister)


@pytest.mark.unit
def test__init__requires_store_or_factory() -> None:
    with pytest.raises(ValueError):
        SCMProviderGenerator()


@pytest.mark.unit
def test__get_requeue_after__default(github_generator: ApplicationSetGenerator) -> None:
    generator = fake_generator(FakeRepositoryLister([]))

    assert generator.get_requeue_after(github_generator) == timedelta(minutes=30)
    assert DEFAULT_REQUEUE_AFTER == timedelta(minutes=30)


@pytest.mark.unit
def test__get_requeue_after__override() -> None:
    generator = fake_generator(FakeRepositoryLister([]))
    entry = make_generator(github={"organization": "acme"}, requeueAfterSeconds=600)

    assert generator.get_requeue_after(entry) == timedelta(seconds=600)


@pytest.mark.unit
@pytest.mark.parametrize("seconds", [0, -5])
def test__get_requeue_after__non_positive_override_is_passed_through(seconds: int) -> None:
    generator = fake_generator(FakeRepositoryLister([]))
    entry = make_generator(github={"organization": "acme"}, requeueAfterSeconds=seconds)

    assert generator.get_requeue_after(entry) == timedelta(seconds=seconds)


@pytest.mark.unit
def test__get_template__returns_embedded_template() -> None:
    template = {"metadata": {"name": "{{repository}}-{{branchNormalized}}"}, "spec": {"project": "default"}}
    entry = make_generator(github={"organization": "acme"}, template=template)

    assert fake_generator(FakeRepositoryLister([])).get_template(entry) is entry.scm_provider.template
    assert entry.scm_provider.template == template


@pytest.mark.unit
def test__get_template__missing_config() -> None:
    with pytest.raises(MissingConfigError):
        fake_generator(FakeRepositoryLister([])).get_template(ApplicationSetGenerator())


@pytest.mark.unit
@pytest.mark.parametrize("entry", [None, ApplicationSetGenerator()])
def test__generate_params__missing_config(entry, parent: ParentResource) -> None:
    with pytest.raises(MissingConfigError):
        fake_generator(FakeRepositoryLister([])).generate_params(entry, parent)


@pytest.mark.unit
def test__generate_params__missing_parent(github_generator: ApplicationSetGenerator) -> None:
    with pytest.raises(MissingConfigError):
        fake_generator(FakeRepositoryLister([])).generate_params(github_generator, None)


@pytest.mark.unit
def test__generate_params__no_provider_configured(parent: ParentResource) -> None:
    entry = make_generator(filters=[{"repositoryMatch": ".*"}])

    with pytest.raises(NoProviderConfiguredError):
        SCMProviderGenerator(LocalSecretRepository()).generate_params(entry, parent)
    with pytest.raises(NoProviderConfiguredError):
        fake_generator(FakeRepositoryLister([make_record("svc")])).generate_params(entry, parent)


@pytest.mark.unit
def test__generate_params__one_bundle_per_record_in_order(
    github_generator: ApplicationSetGenerator, parent: ParentResource
) -> None:
    lister = FakeRepositoryLister(
        [make_record("zeta"), make_record("alpha", labels=["x"])],
        branches={"zeta": [("main", "1"), ("feature/A", "2")]},
    )

    params = fake_generator(lister).generate_params(github_generator, parent)

    assert [(p["repository"], p["branch"], p["sha"]) for p in params] == [
        ("zeta", "main", "1"),
        ("zeta", "feature/A", "2"),
        ("alpha", "main", ""),
    ]
    assert params[1]["branchNormalized"] == "feature-a"
    assert params[2]["labels"] == "x"
    assert lister.closed


@pytest.mark.unit
def test__generate_params__passes_clone_protocol(parent: ParentResource) -> None:
    lister = FakeRepositoryLister([make_record("svc")])
    entry = make_generator(github={"organization": "acme"}, cloneProtocol="https")

    fake_generator(lister).generate_params(entry, parent)

    assert lister.clone_protocols == ["https"]


@pytest.mark.unit
def test__generate_params__factory_receives_config_and_namespace(
    github_generator: ApplicationSetGenerator, parent: ParentResource
) -> None:
    seen = []

    def factory(config: SCMProviderGeneratorConfig, namespace: str) -> FakeRepositoryLister:
        seen.append((config, namespace))
        return FakeRepositoryLister([])

    assert SCMProviderGenerator(provider_factory=factory).generate_params(github_generator, parent) == []
    assert seen == [(github_generator.scm_provider, "ns1")]


@pytest.mark.unit
def test__generate_params__unexpected_list_failure_is_wrapped(
    github_generator: ApplicationSetGenerator, parent: ParentResource
) -> None:
    class ExplodingLister(FakeRepositoryLister):
        def list_repos(self, clone_protocol):
            raise RuntimeError("boom")

    lister = ExplodingLister([])

    with pytest.raises(ListError) as exc_info:
        fake_generator(lister).generate_params(github_generator, parent)

    assert str(exc_info.value) == "error listing repos: boom (stage=list, provider=Github)"
    assert lister.closed


@pytest.mark.unit
def test__generate_params__factory_failure_is_provider_init_error(
    github_generator: ApplicationSetGenerator, parent: ParentResource
) -> None:
    def factory(config, namespace):
        raise ConnectionError("no route")

    with pytest.raises(ProviderInitError) as exc_info:
        SCMProviderGenerator(provider_factory=factory).generate_params(github_generator, parent)

    assert exc_info.value.provider == "Github"


@pytest.mark.unit
def test__generate_params__missing_secret_key_makes_no_provider_call(
    monkeypatch: pytest.MonkeyPatch, parent: ParentResource
) -> None:
    calls = []
    monkeypatch.setattr(provider_selector, "GithubProvider", lambda *args, **kwargs: calls.append(args))
    secrets = LocalSecretRepository({("ns1", "tok"): {"other": "value"}})
    entry = make_generator(github={"organization": "acme", "tokenRef": {"secretName": "tok", "key": "token"}})

    with pytest.raises(SecretKeyMissingError) as exc_info:
        SCMProviderGenerator(secrets).generate_params(entry, parent)

    assert (exc_info.value.namespace, exc_info.value.name, exc_info.value.key) == ("ns1", "tok", "token")
    assert calls == []


@pytest.mark.unit
def test__generate_params__concurrent_invocations_are_independent(parent: ParentResource) -> None:
    listers = {
        f"org{i}": FakeRepositoryLister([make_record(f"repo{i}-{j}", organization=f"org{i}") for j in range(3)])
        for i in range(40)
    }
    generator = SCMProviderGenerator(provider_factory=lambda config, namespace: listers[config.github.organization])

    def run(org: str) -> tuple[str, list[dict[str, str]]]:
        return org, generator.generate_params(make_generator(github={"organization": org}), parent)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(run, listers))

    for org, params in results:
        assert {p["organization"] for p in params} == {org}
        assert [p["repository"] for p in params] == [f"repo{org[3:]}-{j}" for j in range(3)]


@pytest.mark.unit
def test__generate_params__github_end_to_end(
    monkeypatch: pytest.MonkeyPatch,
    secret_repo: LocalSecretRepository,
    parent: ParentResource,
) -> None:
    seen_auth = set()

    def handler(request: httpx.Request) -> httpx.Response:
        seen_auth.add(request.headers.get("Authorization"))
        if request.url.path == "/orgs/acme/repos":
            return httpx.Response(
                200,
                json=[
                    {
                        "id": 1,
                        "name": "svc",
                        "owner": {"login": "acme"},
                        "ssh_url": "git@github.com:acme/svc.git",
                        "clone_url": "https://github.com/acme/svc.git",
                        "default_branch": "main",
                        "topics": [],
                    },
                    {
                        "id": 2,
                        "name": "docs",
                        "owner": {"login": "acme"},
                        "ssh_url": "git@github.com:acme/docs.git",
                        "clone_url": "https://github.com/acme/docs.git",
                        "default_branch": "main",
                        "topics": [],
                    },
                ],
            )
        if request.url.path == "/repos/acme/svc/branches":
            return httpx.Response(
                200,
                json=[{"name": "main", "commit": {"sha": "aaa"}}, {"name": "dev", "commit": {"sha": "bbb"}}],
            )
        return httpx.Response(404)

    def github_provider(*args, **kwargs) -> GithubProvider:
        kwargs["http_client"] = mock_http_client(handler, "https://api.github.com")
        return GithubProvider(*args, **kwargs)

    monkeypatch.setattr(provider_selector, "GithubProvider", github_provider)
    entry = make_generator(
        github={"organization": "acme", "allBranches": True, "tokenRef": {"secretName": "tok", "key": "token"}},
        filters=[{"repositoryMatch": "^svc$"}],
    )

    params = SCMProviderGenerator(secret_repo).generate_params(entry, parent)

    assert [(p["organization"], p["repository"], p["branch"], p["branchNormalized"]) for p in params] == [
        ("acme", "svc", "main", "main"),
        ("acme", "svc", "dev", "dev"),
    ]
    assert params[0]["url"] == "git@github.com:acme/svc.git"
    assert params[1]["sha"] == "bbb"
    assert seen_auth == {"token abc123"}
