from mysh.shell import main

main()
