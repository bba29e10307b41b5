import json
from mock import patch

from devops_clients import jenkins
from tests.helper import build_response_mock
from tests.jobs.base import JenkinsJobsTestBase


class JenkinsGetJobInfoTest(JenkinsJobsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_simple(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps(self.job_info)

        job_info = self.j.get_job_info(u'Test Job')

        self.assertEqual(job_info, self.job_info)
        self.assertEqual(
            jenkins_mock.call_args[0][0].url,
            self.make_url('job/Test%20Job/api/json?depth=0'))
        self._check_requests(jenkins_mock.call_args_list)

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_return_none(self, jenkins_mock):
        jenkins_mock.return_value = None

        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.get_job_info(u'TestJob')
        self.assertEqual(
            str(context_manager.exception),
            'job[TestJob] does not exist')

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_return_invalid_json(self, jenkins_mock):
        jenkins_mock.return_value = 'Invalid JSON'

        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.get_job_info(u'TestJob')
        self.assertEqual(
            str(context_manager.exception),
            'Could not parse JSON info for job[TestJob]')

    @patch('devops_clients.jenkins.requests.Session.send', autospec=True)
    def test_raise_HTTPError(self, session_send_mock):
        session_send_mock.return_value = build_response_mock(
            404, reason="Not Found")

        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.get_job_info(u'TestJob')
        self.assertEqual(
            session_send_mock.call_args[0][1].url,
            self.make_url('job/TestJob/api/json?depth=0'))
        self.assertEqual(
            str(context_manager.exception),
            'job[TestJob] does not exist')


class JenkinsGetJobTest(JenkinsJobsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_in_folders(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps(self.job_info)

        self.assertEqual(self.j.get_job(u'Test Job', u'team', u'app'),
                         self.job_info)
        self.assertEqual(
            jenkins_mock.call_args[0][0].url,
            self.make_url('job/team/job/app/job/Test%20Job/api/json?depth=0'))

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_top_level(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps(self.job_info)

        self.j.get_job(u'Test Job')
        self.assertEqual(
            jenkins_mock.call_args[0][0].url,
            self.make_url('job/Test%20Job/api/json?depth=0'))


class JenkinsGetFolderTest(JenkinsJobsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_simple(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps(self.folder_info)

        self.assertEqual(self.j.get_folder(u'Test Folder', u'team'),
                         self.folder_info)
        self.assertEqual(
            jenkins_mock.call_args[0][0].url,
            self.make_url('job/team/job/Test%20Folder/api/json?depth=0'))

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_not_a_folder(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps(self.job_info)

        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.get_folder(u'Test Job', u'team')
        self.assertEqual(
            str(context_manager.exception),
            'job[team/Test Job] is not a folder')


class JenkinsIsFolderTest(JenkinsJobsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_is_folder(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps(self.folder_info)
        self.assertTrue(self.j.is_folder('Test Folder'))

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_is_not_folder(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps(self.job_info)
        self.assertFalse(self.j.is_folder('Test Job'))


class JenkinsJobExistsTest(JenkinsJobsTestBase):

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_job_missing(self, jenkins_mock):
        jenkins_mock.side_effect = jenkins.NotFoundException()

        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.assert_job_exists('NonExistent')
        self.assertEqual(
            str(context_manager.exception),
            'job[NonExistent] does not exist')

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_job_exists(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps({'name': 'ExistingJob'})

        self.assertTrue(self.j.job_exists('a Folder/ExistingJob'))
        self.assertEqual(
            jenkins_mock.call_args[0][0].url,
            self.make_url('job/a%20Folder/job/ExistingJob/api/json?tree=name'))

    @patch.object(jenkins.Jenkins, 'jenkins_open')
    def test_unexpected_name(self, jenkins_mock):
        jenkins_mock.return_value = json.dumps({'name': 'Other'})

        with self.assertRaises(jenkins.JenkinsException) as context_manager:
            self.j.get_job_name('TestJob')
        self.assertEqual(
            str(context_manager.exception),
            'Jenkins returned an unexpected job name Other '
            '(expected: TestJob)')
