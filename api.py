"""
Blood Group Engine - Flask REST API
웹 화면용 API 엔드포인트

실행: flask --app api run --debug
또는: python api.py
"""

from flask import Flask, jsonify, request
from flask_cors import CORS

from bloodgroup_engine import (
    BloodGroupSystem, UnknownPhenotype,
    ApiConfig, SUPPORTED_LANGUAGES,
    build_report, can_donate, compute_distribution, phenotype_options
)
from bloodgroup_engine.report import system_key

app = Flask(__name__)
CORS(app)  # CORS 활성화


@app.errorhandler(UnknownPhenotype)
def handle_unknown_phenotype(e):
    return jsonify({
        'success': False,
        'error': str(e),
        'system': e.system.value if isinstance(e.system, BloodGroupSystem) else e.system,
        'phenotype': e.phenotype
    }), 400


@app.route('/')
def index():
    """API 정보"""
    return jsonify({
        'name': 'Blood Group Engine API',
        'version': '1.0.0',
        'description': '부모 혈액형으로 자녀 혈액형 확률 계산',
        'languages': list(SUPPORTED_LANGUAGES),
        'endpoints': {
            '/systems': 'GET - 혈액형 체계와 표현형 목록',
            '/distribution': 'POST - 단일 체계 자녀 표현형 분포',
            '/report': 'POST - 전체 결과 (분포, 퍼넷, 위험, 수혈 적합성)',
            '/compatibility': 'POST - 공혈자 → 수혈자 적합 여부'
        }
    })


@app.route('/systems', methods=['GET'])
def get_systems():
    """혈액형 체계 목록"""
    systems = [
        {
            'id': system_key(system),
            'name': system.value,
            'phenotypes': phenotype_options(system)
        }
        for system in BloodGroupSystem
    ]
    return jsonify({'systems': systems})


@app.route('/distribution', methods=['POST'])
def get_distribution():
    """
    단일 체계 자녀 표현형 분포

    Request Body:
    {
        "system": "abo_rh",     // 혈액형 체계
        "father": "A+",         // 아버지 표현형
        "mother": "O-"          // 어머니 표현형
    }
    """
    data = request.get_json(silent=True) or {}

    missing = [k for k in ('system', 'father', 'mother') if not data.get(k)]
    if missing:
        return _bad_request(f"필수 항목 누락: {', '.join(missing)}")

    try:
        system = BloodGroupSystem.from_name(data['system'])
    except ValueError as e:
        return _bad_request(str(e))

    distribution = compute_distribution(system, data['father'], data['mother'])
    return jsonify({'success': True, 'distribution': distribution.to_dict()})


@app.route('/report', methods=['POST'])
def get_report():
    """
    전체 결과

    Request Body:
    {
        "father": {"abo_rh": "A+", "kell": "K+"},   // 또는 "A+"
        "mother": {"abo_rh": "O-", "kell": "K-"},
        "language": "en",                           // en / bn
        "include_chart": false                      // 도넛 차트/퍼넷 이미지 포함 여부
    }
    """
    data = request.get_json(silent=True) or {}
    father = data.get('father')
    mother = data.get('mother')

    if not father or not mother:
        return _bad_request('부모 표현형을 모두 입력해야 함')
    if not isinstance(father, (str, dict)) or not isinstance(mother, (str, dict)):
        return _bad_request('father / mother는 문자열 또는 객체')

    try:
        result = build_report(
            father, mother,
            language=data.get('language', 'en'),
            include_chart=bool(data.get('include_chart', False))
        )
    except ValueError as e:
        if isinstance(e, UnknownPhenotype):
            return handle_unknown_phenotype(e)
        return _bad_request(str(e))

    if 'images' in result:
        result['images'] = {
            key: f"data:image/png;base64,{img}"
            for key, img in result['images'].items()
        }
    return jsonify(result)


@app.route('/compatibility', methods=['POST'])
def get_compatibility():
    """
    Request Body:
    {
        "donor": "O-",
        "recipient": "AB+"
    }
    """
    data = request.get_json(silent=True) or {}
    donor = data.get('donor')
    recipient = data.get('recipient')

    if not donor or not recipient:
        return _bad_request('donor / recipient 필수')

    return jsonify({
        'success': True,
        'donor': donor,
        'recipient': recipient,
        'compatible': can_donate(donor, recipient)
    })


@app.errorhandler(500)
def handle_internal_error(e):
    app.logger.error("unhandled error: %r", getattr(e, 'original_exception', e))
    return jsonify({'success': False, 'error': '서버 내부 오류'}), 500


def _bad_request(message: str):
    return jsonify({'success': False, 'error': message}), 400


if __name__ == '__main__':
    config = ApiConfig.from_env()
    print("=" * 50)
    print("Blood Group Engine API Server")
    print("=" * 50)
    print(f"Server starting at http://{config.host}:{config.port}")
    print()
    app.run(debug=config.debug, host=config.host, port=config.port)
