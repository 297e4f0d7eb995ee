import pathlib

import pytest

from bootstrap.helper import load_yaml, load_table_config, normalize_user_tags, boto3_session


def test_load_yaml(tmp_path: pathlib.Path):
    path = tmp_path / 'table.yaml'
    path.write_text('table:\n  table_name: UrlShortener-dev\n', encoding='utf-8')

    assert load_yaml(path) == {'table': {'table_name': 'UrlShortener-dev'}}


def test_load_yaml_empty_file(tmp_path: pathlib.Path):
    path = tmp_path / 'empty.yaml'
    path.write_text('', encoding='utf-8')

    assert load_yaml(path) == {}


def test_load_yaml_missing_file(tmp_path: pathlib.Path):
    with pytest.raises(FileNotFoundError):
        load_yaml(tmp_path / 'missing.yaml')


def test_load_table_config_defaults(tmp_path: pathlib.Path):
    path = tmp_path / 'table.yaml'
    path.write_text('', encoding='utf-8')

    assert load_table_config(path) == {
        'table_name': 'UrlShortener',
        'partition_key': 'shortCode',
        'ttl_attribute': 'expiration',
        'billing_mode': 'PAY_PER_REQUEST',
        'point_in_time_recovery': True,
    }


def test_load_table_config_overrides(tmp_path: pathlib.Path):
    path = tmp_path / 'table.yaml'
    path.write_text('table:\n  table_name: UrlShortener-dev\n  point_in_time_recovery: false\n', encoding='utf-8')

    config = load_table_config(path)

    assert config['table_name'] == 'UrlShortener-dev'
    assert config['point_in_time_recovery'] is False
    assert config['ttl_attribute'] == 'expiration'


def test_repository_table_config_is_valid():
    config = load_table_config(pathlib.Path(__file__).parents[3] / 'config' / 'table.yaml')

    assert config['table_name'] == 'UrlShortener'
    assert config['partition_key'] == 'shortCode'
    assert config['ttl_attribute'] == 'expiration'


@pytest.mark.parametrize(
    'content, match',
    [
        ('table: [1, 2]\n', 'must be a mapping'),
        ('table:\n  sort_key: createdAt\n', 'Unknown table keys'),
        ('table:\n  billing_mode: ON_DEMAND\n', 'Unsupported billing_mode'),
        ('table:\n  partition_key: id\n', 'partition_key must be .shortCode.'),
        ('table:\n  ttl_attribute: expiresAt\n', 'ttl_attribute must be .expiration.'),
    ],
)
def test_load_table_config_rejects_invalid_documents(tmp_path: pathlib.Path, content: str, match: str):
    path = tmp_path / 'table.yaml'
    path.write_text(content, encoding='utf-8')

    with pytest.raises(ValueError, match=match):
        load_table_config(path)


@pytest.mark.parametrize(
    'tag_str, expected',
    [
        ('', []),
        ('Owner=Pesho', [{'Key': 'Owner', 'Value': 'Pesho'}]),
        ('Owner=Pesho, Service=urlshortener,', [{'Key': 'Owner', 'Value': 'Pesho'}, {'Key': 'Service', 'Value': 'urlshortener'}]),
        ('Expr=a=b', [{'Key': 'Expr', 'Value': 'a=b'}]),
    ],
)
def test_normalize_user_tags(tag_str: str, expected: list[dict[str, str]]):
    assert normalize_user_tags(tag_str) == expected


@pytest.mark.parametrize('tag_str', ['Owner', '=Pesho'])
def test_normalize_user_tags_rejects_malformed_tags(tag_str: str):
    with pytest.raises(ValueError, match='Malformed tag'):
        normalize_user_tags(tag_str)


def test_boto3_session(monkeypatch: pytest.MonkeyPatch):
    calls = []
    monkeypatch.setattr('bootstrap.helper.boto3.Session', lambda **kwargs: calls.append(kwargs))

    boto3_session(None)
    boto3_session('dev', 'eu-central-1')

    assert calls == [{}, {'profile_name': 'dev', 'region_name': 'eu-central-1'}]
