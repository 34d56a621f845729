from flask import Blueprint, jsonify
from services import reminder_scheduler, link_registry

scheduler_api = Blueprint('scheduler_api', __name__)

@scheduler_api.route('/scheduler/status', methods=['GET'])
def scheduler_status():
    """Reminder scheduler state and pending link count"""
    status = reminder_scheduler.get_status()
    status['pending_links'] = link_registry.pending_count()
    return jsonify(status)
