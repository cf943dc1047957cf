# routes/api.py
# JSON API consumed by the single-page frontend

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from criteria_template import get_template
from errors import ApiError
from extensions import db
import logic

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.errorhandler(ApiError)
def handle_api_error(e):
    return jsonify({'error': e.message}), e.status_code


def storage_failure(e):
    db.session.rollback()
    current_app.logger.exception('Database error on %s %s', request.method, request.path)
    return jsonify({'error': str(e)}), 500


def json_body():
    # Malformed or non-object bodies are treated as empty
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@api_bp.route('/evaluations', methods=['GET'])
def list_evaluations():
    try:
        return jsonify(logic.list_evaluations())
    except SQLAlchemyError as e:
        return storage_failure(e)


@api_bp.route('/evaluations/<evaluation_id>', methods=['GET'])
def get_evaluation(evaluation_id):
    try:
        return jsonify(logic.load_evaluation_document(evaluation_id, get_template()))
    except SQLAlchemyError as e:
        return storage_failure(e)


@api_bp.route('/evaluations', methods=['POST'])
def create_evaluation():
    payload = json_body()
    try:
        evaluation = logic.create_evaluation(
            payload.get('programName'), payload.get('universityName'), get_template()
        )
    except SQLAlchemyError as e:
        return storage_failure(e)

    return jsonify({
        'id': evaluation.id,
        'program_name': evaluation.program_name,
        'university_name': evaluation.university_name,
        'message': 'Evaluation created successfully'
    })


@api_bp.route('/evaluations/<eval_id>/criteria/<criterion_index>', methods=['PUT'])
def update_criterion(eval_id, criterion_index):
    payload = json_body()
    try:
        changes = logic.update_criterion(
            eval_id,
            criterion_index,
            payload.get('status'),
            payload.get('evaluation'),
            payload.get('justification')
        )
    except SQLAlchemyError as e:
        return storage_failure(e)

    return jsonify({'message': 'Criterion updated successfully', 'changes': changes})


@api_bp.route('/evaluations/<eval_id>/criteria/<criterion_index>/sub-criteria/<sub_index>', methods=['PUT'])
def update_sub_criterion(eval_id, criterion_index, sub_index):
    payload = json_body()
    try:
        logic.update_sub_criterion(
            eval_id,
            criterion_index,
            sub_index,
            payload.get('evaluation'),
            payload.get('responses'),
            get_template()
        )
    except SQLAlchemyError as e:
        return storage_failure(e)

    return jsonify({'message': 'Sub-criterion updated successfully'})


@api_bp.route('/evaluations/<evaluation_id>/grades', methods=['GET'])
def get_grades(evaluation_id):
    template = get_template()
    try:
        document = logic.load_evaluation_document(evaluation_id, template)
    except SQLAlchemyError as e:
        return storage_failure(e)

    return jsonify({
        'id': document['id'],
        'criteria': logic.suggest_grades(document, template)
    })


@api_bp.route('/criteria-data', methods=['GET'])
def criteria_data():
    return jsonify(get_template().as_json())
