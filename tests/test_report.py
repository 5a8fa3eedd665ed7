"""결과 조립, REST API, CLI 테스트."""

import base64
import json

import pytest

import main
from api import app
from bloodgroup_engine import BloodGroupSystem, UnknownPhenotype, build_report


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


class TestBuildReport:
    def test_primary_panel(self):
        result = build_report('A+', 'O-')
        assert result['success'] is True
        assert result['parents'] == {'father': {'abo_rh': 'A+'}, 'mother': {'abo_rh': 'O−'}}
        assert set(result['punnett']) == {'abo', 'rh'}
        assert [r['key'] for r in result['risks']] == ['rh', 'abo']
        assert len(result['compatibility']) == 4
        assert 'TA-GVHD' in result['relative_donation']['description']

        probs = {p['phenotype']: p['probability']
                 for p in result['distributions']['abo_rh']['probabilities']}
        assert probs == {'A+': 0.25, 'A−': 0.25, 'O+': 0.25, 'O−': 0.25}

    def test_extra_systems_only(self):
        result = build_report({'kell': 'K+', 'mn': 'MN'}, {'kell': 'K-', 'mn': 'M'})
        assert set(result['distributions']) == {'kell', 'mn'}
        assert 'compatibility' not in result
        assert [r['key'] for r in result['risks']] == ['kell']
        assert result['punnett']['mn']['mother_can_pass'] == 'Mother can pass M.'

    def test_invalid_phenotype(self):
        with pytest.raises(UnknownPhenotype):
            build_report({BloodGroupSystem.MN: 'X'}, {BloodGroupSystem.MN: 'M'})

    def test_chart_included(self):
        result = build_report('B+', 'A+', include_chart=True)
        png = base64.b64decode(result['images']['abo_rh'])
        assert png.startswith(b'\x89PNG')
        assert set(result['images']) == {'abo_rh', 'punnett_abo', 'punnett_rh'}
        assert base64.b64decode(result['images']['punnett_rh']).startswith(b'\x89PNG')


class TestApi:
    def test_index(self, client):
        res = client.get('/')
        assert res.status_code == 200
        assert res.get_json()['name'] == 'Blood Group Engine API'

    def test_systems(self, client):
        systems = {s['id']: s for s in client.get('/systems').get_json()['systems']}
        assert systems['abo_rh']['phenotypes'][0] == 'A+'
        assert systems['duffy']['name'] == 'Duffy'

    def test_distribution(self, client):
        res = client.post('/distribution', json={'system': 'abo', 'father': 'AB', 'mother': 'AB'})
        assert res.status_code == 200
        data = res.get_json()['distribution']
        assert data['total_combinations'] == 4
        assert {p['phenotype']: p['count'] for p in data['probabilities']} == \
            {'A': 1, 'B': 1, 'AB': 2}

    def test_distribution_unknown_phenotype(self, client):
        res = client.post('/distribution', json={'system': 'rh', 'father': '+', 'mother': '?'})
        assert res.status_code == 400
        data = res.get_json()
        assert data['success'] is False
        assert data['system'] == 'Rh'
        assert data['phenotype'] == '?'

    def test_distribution_unknown_system(self, client):
        res = client.post('/distribution', json={'system': 'kidd', 'father': 'a', 'mother': 'b'})
        assert res.status_code == 400

    def test_distribution_missing_field(self, client):
        res = client.post('/distribution', json={'system': 'abo', 'father': 'A'})
        assert res.status_code == 400
        assert 'mother' in res.get_json()['error']

    def test_report(self, client):
        res = client.post('/report', json={
            'father': {'abo_rh': 'A+', 'kell': 'K+'},
            'mother': {'abo_rh': 'O-', 'kell': 'K-'},
            'language': 'bn'
        })
        assert res.status_code == 200
        data = res.get_json()
        assert data['language'] == 'bn'
        assert [r['key'] for r in data['risks']] == ['rh', 'abo', 'kell']

    def test_report_with_chart(self, client):
        res = client.post('/report', json={'father': 'O+', 'mother': 'O+', 'include_chart': True})
        assert res.get_json()['images']['abo_rh'].startswith('data:image/png;base64,')

    def test_report_unknown_phenotype(self, client):
        res = client.post('/report', json={'father': {'mn': 'X'}, 'mother': {'mn': 'M'}})
        assert res.status_code == 400
        data = res.get_json()
        assert data['system'] == 'MN'
        assert data['phenotype'] == 'X'

    def test_report_images_include_punnett(self, client):
        res = client.post('/report', json={'father': {'mn': 'MN'}, 'mother': {'mn': 'N'},
                                          'include_chart': True})
        images = res.get_json()['images']
        assert set(images) == {'mn', 'punnett_mn'}
        assert images['punnett_mn'].startswith('data:image/png;base64,')

    def test_report_bad_language(self, client):
        res = client.post('/report', json={'father': 'A+', 'mother': 'A+', 'language': 'xx'})
        assert res.status_code == 400

    def test_report_missing_parent(self, client):
        assert client.post('/report', json={'father': 'A+'}).status_code == 400

    def test_compatibility(self, client):
        res = client.post('/compatibility', json={'donor': 'O-', 'recipient': 'AB+'})
        assert res.get_json()['compatible'] is True
        res = client.post('/compatibility', json={'donor': 'A+', 'recipient': 'O-'})
        assert res.get_json()['compatible'] is False


class TestCli:
    def test_display(self, capsys):
        assert main.main(['--father', 'A+', '--mother', 'O-']) == 0
        out = capsys.readouterr().out
        assert 'Outcome probabilities' in out
        assert 'Rh-incompatibility (HDN)' in out

    def test_extra_systems(self, capsys):
        code = main.main(['--father', 'A+', '--mother', 'A+',
                          '--duffy-father', 'Fy(a+b-)', '--duffy-mother', 'Fy(a-b+)'])
        assert code == 0
        out = capsys.readouterr().out
        assert 'Duffy (Fy)' in out
        assert 'Duffy Fy(a−b−) protection' in out

    def test_unknown_phenotype_exit_code(self, capsys):
        assert main.main(['--father', 'Z+', '--mother', 'O-']) == 2
        assert 'Z+' in capsys.readouterr().err

    def test_no_parents(self, capsys):
        assert main.main([]) == 2

    def test_save(self, tmp_path, capsys):
        code = main.main(['--father', 'B-', '--mother', 'AB+', '--save', '--no-display',
                          '--output', str(tmp_path)])
        assert code == 0
        saved = list(tmp_path.glob('*.json'))
        assert len(saved) == 1
        data = json.loads(saved[0].read_text(encoding='utf-8'))
        assert data['parents']['father']['abo_rh'] == 'B−'

    def test_save_with_chart(self, tmp_path, capsys):
        code = main.main(['--father', 'A+', '--mother', 'O+', '--save', '--chart', '--no-display',
                          '--output', str(tmp_path)])
        assert code == 0
        names = sorted(p.name.split('_', 3)[-1] for p in tmp_path.glob('*.png'))
        assert names == ['abo_rh.png', 'punnett_abo.png', 'punnett_rh.png']
