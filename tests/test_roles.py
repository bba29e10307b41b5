import json
from mock import patch

from devops_clients import jenkins
from devops_clients import permissions
from tests.base import JenkinsTestBase


class JenkinsGetRoleTest(JenkinsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_global_role(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps({
            'permissionIds': {
                'hudson.model.Hudson.Administer': True,
                'hudson.model.Hudson.Read': False,
            },
            'sids': ['admin'],
        })

        role = self.j.get_global_role('admin')

        request = jenkins_mock.call_args[0][0]
        self.assertEqual(request.url,
                         self.make_url('role-strategy/strategy/getRole'))
        self.assertEqual(request.params,
                         {'roleName': 'admin', 'type': 'globalRoles'})
        self.assertEqual(role['name'], 'admin')
        self.assertEqual(role['sids'], ['admin'])
        self.assertTrue(role['permissions']['administer'])
        self.assertFalse(role['permissions']['global_read'])
        self._check_requests(jenkins_mock.call_args_list)

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_project_role(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps({
            'permissionIds': {'hudson.model.Item.Read': True},
            'pattern': 'project1|project1/.*',
            'sids': [],
        })

        role = self.j.get_project_role('project1-viewer')

        self.assertEqual(jenkins_mock.call_args[0][0].params['type'],
                         'projectRoles')
        self.assertEqual(role['pattern'], 'project1|project1/.*')
        self.assertTrue(role['permissions']['item_read'])
        self.assertFalse(role['permissions']['item_delete'])

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_missing_role(self, jenkins_mock):
        jenkins_mock.return_value = '{}'

        self.assertIsNone(self.j.get_global_role('nobody'))
        self.assertIsNone(self.j.get_project_role('nobody'))

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_invalid_json(self, jenkins_mock):
        jenkins_mock.return_value = '<html></html>'

        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.get_global_role('admin')
        self.assertEqual(str(context_manager.exception),
                         'Could not parse JSON info for role[admin]')


class JenkinsAddRoleTest(JenkinsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_global_role(self, jenkins_mock):
        role = self.j.add_global_role('viewer', ['item_read', 'global_read'])

        request = jenkins_mock.call_args[0][0]
        self.assertEqual(request.method, 'POST')
        self.assertEqual(request.url,
                         self.make_url('role-strategy/strategy/addRole'))
        self.assertEqual(request.params, {
            'roleName': 'viewer',
            'type': 'globalRoles',
            'permissionIds': 'hudson.model.Hudson.Read,hudson.model.Item.Read',
            'overwrite': 'false',
        })
        self.assertTrue(role['permissions']['item_read'])
        self.assertFalse(role['permissions']['administer'])
        self._check_requests(jenkins_mock.call_args_list)

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_project_role(self, jenkins_mock):
        role = self.j.add_project_role(
            'project1-admin', 'project1|project1/.*',
            dict((flag, True) for flag in permissions.PROJECT_PERMISSIONS),
            overwrite=True)

        params = jenkins_mock.call_args[0][0].params
        self.assertEqual(params['type'], 'projectRoles')
        self.assertEqual(params['pattern'], 'project1|project1/.*')
        self.assertEqual(params['overwrite'], 'true')
        self.assertEqual(params['permissionIds'].split(','),
                         list(permissions.PROJECT_PERMISSIONS.values()))
        self.assertTrue(all(role['permissions'].values()))

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_unknown_permission(self, jenkins_mock):
        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.add_project_role('project1-admin', '.*', ['administer'])
        self.assertEqual(str(context_manager.exception),
                         'unknown permission[administer]')
        self.assertFalse(jenkins_mock.called)


class JenkinsAssignRoleTest(JenkinsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_global_role(self, jenkins_mock):
        self.j.assign_global_role('admin', 'alice')

        request = jenkins_mock.call_args[0][0]
        self.assertEqual(request.url,
                         self.make_url('role-strategy/strategy/assignRole'))
        self.assertEqual(request.params, {
            'type': 'globalRoles', 'roleName': 'admin', 'sid': 'alice'})

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_project_role(self, jenkins_mock):
        self.j.assign_project_role('project1-viewer', 'bob')

        self.assertEqual(jenkins_mock.call_args[0][0].params, {
            'type': 'projectRoles', 'roleName': 'project1-viewer',
            'sid': 'bob'})


class JenkinsDeleteRoleTest(JenkinsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_delete_project_roles(self, jenkins_mock):
        self.j.delete_project_roles('project1-viewer', 'project1-admin')

        request = jenkins_mock.call_args[0][0]
        self.assertEqual(request.url,
                         self.make_url('role-strategy/strategy/removeRoles'))
        self.assertEqual(request.params, {
            'type': 'projectRoles',
            'roleNames': 'project1-viewer,project1-admin'})

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_delete_user_in_project(self, jenkins_mock):
        self.j.delete_user_in_project('alice')

        request = jenkins_mock.call_args[0][0]
        self.assertEqual(request.url,
                         self.make_url('role-strategy/strategy/deleteSid'))
        self.assertEqual(request.params,
                         {'type': 'projectRoles', 'sid': 'alice'})
