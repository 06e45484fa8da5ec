from flask import Blueprint, current_app, jsonify


rooms = Blueprint('rooms', __name__)


def _session():
    return current_app.extensions['catmouse']


@rooms.route('/rooms', methods=['GET'])
def list_rooms():
    """
    Returns the public seat view of every room.
    """
    return jsonify(_session().room_views())


@rooms.route('/rooms/<string:room_id>', methods=['GET'])
def get_room(room_id):
    """
    Returns the public seat view of a single room.
    """
    view = _session().room_view(room_id)
    if view is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(view)


@rooms.route('/config', methods=['GET'])
def get_config():
    return jsonify(_session().settings.to_dict())
