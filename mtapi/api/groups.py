"""User groups and their members"""

from .common import *
from .identifiers import group_segment, user_segment, xml_escape


def _group_path(group_id) -> str:
    return 'groups/' + group_segment(group_id)


class GroupMixin(object):
    def groups_get(self, group_id=''):
        """Lists all groups, or only the group with the given ID or name."""
        path = _group_path(group_id) if group_id not in ('', None) else 'groups'
        return self._output(self._send(self.DekiReq.get, path))

    def groups_post(self, name: str, group_id: int = None):
        """Creates a group, or renames the group with numeric *group_id*."""
        attr = ' id="%i"' % int(group_id) if group_id else ''
        body = '<group%s><name>%s</name></group>' % (attr, xml_escape(name))
        return self._output(self._send(self.DekiReq.post, 'groups', body, 'application/xml'))

    def groups_users_get(self, group_id):
        return self._output(self._send(self.DekiReq.get, _group_path(group_id) + '/users'))

    def groups_users_post(self, group_id, users: 'Iterable[int]' = ()):
        """Adds users (numeric IDs) to a group."""
        body = '<users>%s</users>' % ''.join('<user id="%i"/>' % int(u) for u in users)
        return self._output(self._send(self.DekiReq.post, _group_path(group_id) + '/users', body,
                                       'application/xml'))

    def groups_users_delete(self, group_id, user_id):
        """Removes a user from a group. Both may be given by ID or name."""
        path = _group_path(group_id) + '/users/' + user_segment(user_id)
        return self._output(self._send(self.DekiReq.delete, path))
