USER_ID = 1
OTHER_USER_ID = 2
